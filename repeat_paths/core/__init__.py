"""
Core graph path modules for repeat_paths.

Author: Kevin R. Roy
"""

from .diplotypes import (
    Diplotype,
    canonicalize,
    enumerate_diplotypes,
    extend_diplotypes,
    get_candidate_diplotypes,
)
from .genotypes import (
    cap_lengths,
    extract_repeat_lengths,
    get_genotype_nodes_by_node_range,
    get_genotype_nodes_from_lengths,
    parse_genotype,
)
from .graph import (
    Graph,
    make_deletion_graph,
    make_double_swap_graph,
    make_str_graph,
    make_swap_graph,
)
from .kmer_index import (
    KmerIndex,
    enumerate_kmer_paths,
)
from .locus import (
    LocusSpecification,
    VariantSpecification,
    VariantType,
)
from .path import Path
from .summary import (
    summarize_diplotype,
    summarize_path,
)

__all__ = [
    # Graph
    'Graph',
    'make_deletion_graph',
    'make_swap_graph',
    'make_double_swap_graph',
    'make_str_graph',
    'Path',
    # Locus
    'LocusSpecification',
    'VariantSpecification',
    'VariantType',
    # Genotypes
    'parse_genotype',
    'extract_repeat_lengths',
    'cap_lengths',
    'get_genotype_nodes_by_node_range',
    'get_genotype_nodes_from_lengths',
    # Diplotypes
    'Diplotype',
    'extend_diplotypes',
    'canonicalize',
    'enumerate_diplotypes',
    'get_candidate_diplotypes',
    # Summaries
    'summarize_path',
    'summarize_diplotype',
    # K-mer index
    'KmerIndex',
    'enumerate_kmer_paths',
]
