"""
Extraction of repeat genotypes and their node sequences.

Repeat lengths come from a VCF produced by a repeat genotyper: each record
carries a VARID=<variant id> INFO entry, and the third colon-separated field
of the sample column holds the genotype as 'a', 'a/b' or a no-call ('./.').

Author: Kevin R. Roy
"""

import gzip
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Tuple, Union

from ..exceptions import (
    GenotypeNotFoundError,
    InconsistentAlleleCountError,
    LocusContractError,
    MalformedGenotypeError,
    MissingGenotypeError,
    UnsupportedVariantTypeError,
)
from .locus import LocusSpecification, VariantSpecification, VariantType

logger = logging.getLogger(__name__)

NodeRange = Tuple[int, int]
NodeVector = Tuple[int, ...]

NO_CALL_ENCODINGS = {'./.', '.'}
GENOTYPE_FIELD_INDEX = 2
MAX_ALLELES = 2


def parse_genotype(encoding: str, variant_id: str) -> List[int]:
    """
    Parse a genotype encoding into allele repeat counts.

    Args:
        encoding: Genotype string, e.g. '3/4', '12' or './.'
        variant_id: Variant the genotype belongs to (for error messages)

    Returns:
        List with one count per allele

    Raises:
        MissingGenotypeError: For a no-call
        MalformedGenotypeError: If a count is not a non-negative integer
        InconsistentAlleleCountError: If more than two alleles are given
    """
    encoding = encoding.strip()
    if encoding in NO_CALL_ENCODINGS:
        raise MissingGenotypeError(variant_id)

    pieces = encoding.split('/')
    if len(pieces) > MAX_ALLELES:
        raise InconsistentAlleleCountError(
            f"Genotype {encoding} of {variant_id} has more than {MAX_ALLELES} alleles"
        )

    sizes = []
    for piece in pieces:
        if not (piece.isascii() and piece.isdigit()):
            raise MalformedGenotypeError(f"Invalid genotype {encoding} for {variant_id}")
        sizes.append(int(piece))
    return sizes


def _record_matches(line: str, variant_id: str) -> bool:
    """Check if a VCF data line carries VARID=<variant_id>."""
    columns = line.split('\t')
    if len(columns) >= 8:
        return f"VARID={variant_id}" in columns[7].split(';')
    return f"VARID={variant_id};" in line


def extract_repeat_lengths(vcf_path: Union[str, Path], variant_id: str) -> List[int]:
    """
    Look up the genotype of a repeat variant in a VCF file.

    Args:
        vcf_path: Path to the VCF (plain or gzipped)
        variant_id: Variant identifier (the VARID INFO value)

    Returns:
        Repeat lengths, one per allele

    Raises:
        OSError: If the file cannot be opened
        GenotypeNotFoundError: If no record exists for variant_id
        MissingGenotypeError: If the record is a no-call
    """
    open_func = gzip.open if str(vcf_path).endswith('.gz') else open

    with open_func(vcf_path, 'rt') as f:
        for line in f:
            if line.startswith('#'):
                continue
            line = line.rstrip('\n')
            if not _record_matches(line, variant_id):
                continue

            sample_fields = line.split('\t')[-1].split(':')
            if len(sample_fields) <= GENOTYPE_FIELD_INDEX:
                raise MalformedGenotypeError(
                    f"Record for {variant_id} has no repeat genotype field"
                )
            return parse_genotype(sample_fields[GENOTYPE_FIELD_INDEX], variant_id)

    raise GenotypeNotFoundError(variant_id)


def cap_lengths(upper_bound: int, lengths: List[int]) -> List[int]:
    """Clamp repeat lengths to an upper bound (typically the mean fragment length)."""
    return [length if length <= upper_bound else upper_bound for length in lengths]


def _repeat_node(variant: VariantSpecification) -> int:
    if variant.variant_type != VariantType.REPEAT:
        raise UnsupportedVariantTypeError(
            f"Locus definitions containing small variants (e.g. '(A|T)') are not supported: "
            f"{variant.variant_id}"
        )
    if len(variant.nodes) != 1:
        raise LocusContractError(
            f"Repeat {variant.variant_id} must correspond to exactly one node, got {variant.nodes}"
        )
    if not variant.present_nodes:
        raise LocusContractError(f"Repeat {variant.variant_id} has no node in the graph")
    return variant.nodes[0]


def get_genotype_nodes_from_lengths(
    locus: LocusSpecification,
    lengths_by_variant: Mapping[str, List[int]],
    mean_frag_len: int,
) -> Dict[NodeRange, List[NodeVector]]:
    """
    Determine the node sequence of each allele of every repeat in a locus.

    Args:
        locus: Locus description
        lengths_by_variant: Repeat lengths keyed by variant id
        mean_frag_len: Upper bound on repeat lengths

    Returns:
        Allele node vectors keyed by the inclusive node range of each variant,
        ordered by range. For example, a (CAG)* repeat on node 1 with genotype
        3/4 gives {(1, 1): [(1, 1, 1), (1, 1, 1, 1)]}.
    """
    genotype_nodes_by_range: Dict[NodeRange, List[NodeVector]] = {}
    repeat_nodes = [_repeat_node(variant) for variant in locus.variants]

    for variant, repeat_node in zip(locus.variants, repeat_nodes):
        if variant.variant_id not in lengths_by_variant:
            raise GenotypeNotFoundError(variant.variant_id)
        lengths = cap_lengths(mean_frag_len, list(lengths_by_variant[variant.variant_id]))
        if not 1 <= len(lengths) <= MAX_ALLELES:
            raise InconsistentAlleleCountError(
                f"Variant {variant.variant_id} has {len(lengths)} alleles"
            )

        node_range = variant.node_range
        if node_range in genotype_nodes_by_range:
            raise LocusContractError(f"Variants overlap at nodes {node_range}")
        genotype_nodes_by_range[node_range] = [(repeat_node,) * length for length in lengths]
        logger.debug(f"{variant.variant_id}: nodes {node_range}, capped lengths {lengths}")

    return dict(sorted(genotype_nodes_by_range.items()))


def get_genotype_nodes_by_node_range(
    mean_frag_len: int,
    vcf_path: Union[str, Path],
    locus: LocusSpecification,
) -> Dict[NodeRange, List[NodeVector]]:
    """
    Read the genotypes of all variants of a locus and map them to node vectors.

    Variant types are checked before the VCF is read, so a locus with a small
    variant fails with UnsupportedVariantTypeError regardless of its calls.

    Args:
        mean_frag_len: Mean fragment length; longer repeats are capped to it
        vcf_path: VCF with the repeat genotypes
        locus: Locus description

    Returns:
        See get_genotype_nodes_from_lengths
    """
    for variant in locus.variants:
        _repeat_node(variant)

    lengths_by_variant = {
        variant.variant_id: extract_repeat_lengths(vcf_path, variant.variant_id)
        for variant in locus.variants
    }

    logger.info(f"Extracted genotypes of {len(lengths_by_variant)} variants for {locus.locus_id}")

    return get_genotype_nodes_from_lengths(locus, lengths_by_variant, mean_frag_len)
