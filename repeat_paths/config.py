"""
Configuration loading for repeat_paths.

A locus is described in YAML by its graph (node sequences and edges) and the
variants annotated on it:

    locus_id: HTT
    nodes: [ATTCGAGTC, CAG, CAACAG, CCG, CTGCTGAGC]
    edges: [[0, 1], [1, 1], [1, 2], [2, 3], [3, 3], [3, 4]]
    variants:
      - id: HTT
        type: repeat
        nodes: [1]
      - id: HTT_CCG
        type: repeat
        nodes: [3]

Author: Kevin R. Roy
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml

from .core.graph import Graph
from .core.locus import LocusSpecification, VariantSpecification, VariantType


DEFAULT_MEAN_FRAGMENT_LENGTH = 400
DEFAULT_KMER_SIZE = 12


def _parse_node_sequence(node: Any, node_id: int) -> str:
    if node is None:
        return ''
    if isinstance(node, dict):
        node = node.get('sequence', '')
    if not isinstance(node, str):
        raise ValueError(f"Node {node_id} sequence must be a string, got {node!r}")
    return node


def _parse_edge(edge: Any) -> tuple:
    if isinstance(edge, dict):
        edge = (edge.get('from'), edge.get('to'))
    if not isinstance(edge, (list, tuple)) or len(edge) != 2:
        raise ValueError(f"Edge must be a [from, to] pair, got {edge!r}")
    return int(edge[0]), int(edge[1])


def locus_from_dict(data: Dict[str, Any]) -> LocusSpecification:
    """
    Build a LocusSpecification from a parsed YAML mapping.

    Raises:
        ValueError: If required keys are missing or values are invalid
    """
    if not isinstance(data, dict):
        raise ValueError("Locus description must be a mapping")
    for key in ('nodes', 'edges', 'variants'):
        if key not in data:
            raise ValueError(f"Locus description must have '{key}'")

    locus_id = str(data.get('locus_id', data.get('name', 'unnamed')))
    sequences = [_parse_node_sequence(node, i) for i, node in enumerate(data['nodes'])]
    edges = [_parse_edge(edge) for edge in data['edges']]
    graph = Graph(sequences, edges, name=locus_id)

    variants = []
    for variant_data in data['variants']:
        if 'id' not in variant_data:
            raise ValueError(f"Variant in {locus_id} has no 'id'")
        variants.append(VariantSpecification(
            variant_id=str(variant_data['id']),
            variant_type=VariantType.from_string(variant_data.get('type', 'repeat')),
            nodes=list(variant_data.get('nodes', [])),
        ))

    return LocusSpecification(locus_id=locus_id, graph=graph, variants=variants)


def load_locus(path: Union[str, Path]) -> LocusSpecification:
    """Load a locus description from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return locus_from_dict(data)


@dataclass
class RunConfig:
    """Configuration for processing one or more loci of a sample."""
    loci: List[Path]
    vcf: Path
    output_dir: Path = Path('./results')

    # Repeat lengths above this are capped
    mean_fragment_length: int = DEFAULT_MEAN_FRAGMENT_LENGTH

    # K-mer index size; None disables indexing
    kmer_size: Optional[int] = DEFAULT_KMER_SIZE

    threads: int = 4

    def __post_init__(self):
        if self.mean_fragment_length < 0:
            raise ValueError(f"Mean fragment length must be non-negative: {self.mean_fragment_length}")
        if self.kmer_size is not None and self.kmer_size < 1:
            raise ValueError(f"K-mer size must be positive: {self.kmer_size}")
        if self.threads < 1:
            raise ValueError(f"Threads must be positive: {self.threads}")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'RunConfig':
        """Load configuration from YAML file. Relative paths resolve against its directory."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if 'vcf' not in data:
            raise ValueError("Run configuration must have 'vcf'")
        loci = data.get('loci', [])
        if isinstance(loci, str):
            loci = [loci]
        if not loci:
            raise ValueError("Run configuration must list at least one locus under 'loci'")

        kmer_size = data.get('kmer_size', DEFAULT_KMER_SIZE)
        base_dir = path.parent

        def resolve(value: str) -> Path:
            p = Path(value)
            return p if p.is_absolute() else base_dir / p

        return cls(
            loci=[resolve(locus) for locus in loci],
            vcf=resolve(data['vcf']),
            output_dir=resolve(data.get('output_dir', './results')),
            mean_fragment_length=int(data.get('mean_fragment_length', DEFAULT_MEAN_FRAGMENT_LENGTH)),
            kmer_size=None if kmer_size is None else int(kmer_size),
            threads=int(data.get('threads', 4)),
        )
