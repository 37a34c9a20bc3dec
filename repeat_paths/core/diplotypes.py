"""
Enumeration of candidate diplotypes for a repeat locus.

The locus graph is walked once from the left flank to the right flank.
Invariant nodes are appended to every haplotype; at each variant region the
candidates branch over the allele assignments (both phases for two alleles).

Author: Kevin R. Roy
"""

import logging
from pathlib import Path as FilePath
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import InconsistentAlleleCountError, LocusContractError
from .genotypes import NodeRange, NodeVector, get_genotype_nodes_by_node_range
from .graph import Graph
from .locus import LocusSpecification
from .path import Path

logger = logging.getLogger(__name__)

Diplotype = Tuple[Path, ...]
Haplotypes = List[List[int]]


def _get_allele_count(node_range_to_alleles: Mapping[NodeRange, Sequence[NodeVector]]) -> int:
    """Number of alleles shared by all variant regions."""
    counts = {len(alleles) for alleles in node_range_to_alleles.values()}
    if len(counts) != 1:
        raise InconsistentAlleleCountError(
            f"All variants must have the same number of alleles, found {sorted(counts)}"
        )
    num_alleles = counts.pop()
    if num_alleles not in (1, 2):
        raise InconsistentAlleleCountError(f"Variants must have 1 or 2 alleles, found {num_alleles}")
    return num_alleles


def _check_regions(graph: Graph, regions: Sequence[NodeRange]):
    last_interior = graph.num_nodes - 2
    previous_end = 0
    for range_from, range_to in regions:
        if range_from > range_to:
            raise LocusContractError(f"Variant region ({range_from}, {range_to}) is reversed")
        if range_from < 1 or range_to > last_interior:
            raise LocusContractError(
                f"Variant region ({range_from}, {range_to}) overlaps a flank of a "
                f"{graph.num_nodes}-node graph"
            )
        if range_from <= previous_end:
            raise LocusContractError(f"Variant region ({range_from}, {range_to}) overlaps another region")
        previous_end = range_to


def _find_region(
    node_range_to_alleles: Mapping[NodeRange, Sequence[NodeVector]],
    node: int,
) -> Optional[Tuple[Sequence[NodeVector], int]]:
    """Alleles of the region containing node and the last node of that region."""
    for (range_from, range_to), alleles in node_range_to_alleles.items():
        if range_from <= node <= range_to:
            return alleles, range_to
    return None


def extend_diplotypes(
    candidates: List[Haplotypes],
    alleles: Sequence[NodeVector],
) -> List[Haplotypes]:
    """
    Extend every candidate by one variant region.

    With one allele each haplotype gets that allele. With two alleles each
    candidate yields two children, one for each phase: (hap1+allele1,
    hap2+allele2) and (hap1+allele2, hap2+allele1).
    """
    extended = []
    for haplotypes in candidates:
        if len(haplotypes) != len(alleles):
            raise LocusContractError(
                f"Candidate has {len(haplotypes)} haplotypes but variant has {len(alleles)} alleles"
            )
        if len(haplotypes) == 1:
            extended.append([haplotypes[0] + list(alleles[0])])
        else:
            first, second = haplotypes
            extended.append([first + list(alleles[0]), second + list(alleles[1])])
            extended.append([first + list(alleles[1]), second + list(alleles[0])])
    return extended


def canonicalize(diplotype: Sequence[Path]) -> Diplotype:
    """Order haplotypes so that front >= back."""
    if len(diplotype) == 2 and diplotype[0] < diplotype[1]:
        return diplotype[1], diplotype[0]
    return tuple(diplotype)


def enumerate_diplotypes(
    graph: Graph,
    node_range_to_alleles: Mapping[NodeRange, Sequence[NodeVector]],
) -> List[Diplotype]:
    """
    Enumerate all candidate diplotypes consistent with the given alleles.

    Args:
        graph: Locus graph; node 0 is the left flank, the last node the right flank
        node_range_to_alleles: Allele node vectors keyed by inclusive variant node range

    Returns:
        Sorted list of distinct diplotypes, each with its haplotypes ordered
        so that front >= back

    Raises:
        InconsistentAlleleCountError: If regions disagree on allele count
            or have other than one or two alleles
        LocusContractError: If the graph is empty, no region is given, or
            regions are reversed, overlapping or touch the flanks
    """
    if graph.num_nodes == 0:
        raise LocusContractError("Locus graph has no nodes")
    if not node_range_to_alleles:
        raise LocusContractError("Locus has no variant regions")

    num_alleles = _get_allele_count(node_range_to_alleles)
    regions = dict(sorted(node_range_to_alleles.items()))
    _check_regions(graph, list(regions))

    candidates: List[Haplotypes] = [[[0] for _ in range(num_alleles)]]

    right_flank = graph.num_nodes - 1
    node = 1
    while node < right_flank:
        region = _find_region(regions, node)
        if region:
            alleles, range_to = region
            candidates = extend_diplotypes(candidates, alleles)
            node = range_to
        else:
            for haplotypes in candidates:
                for haplotype in haplotypes:
                    haplotype.append(node)
        node += 1

    right_flank_len = len(graph.node_seq(right_flank))
    diplotypes = []
    for haplotypes in candidates:
        paths = [Path(graph, 0, haplotype + [right_flank], right_flank_len) for haplotype in haplotypes]
        diplotypes.append(canonicalize(paths))

    diplotypes.sort()
    unique: List[Diplotype] = []
    for diplotype in diplotypes:
        if not unique or unique[-1] != diplotype:
            unique.append(diplotype)

    logger.debug(f"{len(candidates)} candidates collapsed into {len(unique)} diplotypes")
    return unique


def get_candidate_diplotypes(
    mean_frag_len: int,
    vcf_path: Union[str, FilePath],
    locus: LocusSpecification,
) -> List[Diplotype]:
    """
    Extract the genotypes of a locus from a VCF and enumerate its diplotypes.

    Args:
        mean_frag_len: Mean fragment length used to cap repeat lengths
        vcf_path: VCF with repeat genotypes
        locus: Locus description

    Returns:
        Sorted list of distinct candidate diplotypes
    """
    genotype_nodes: Dict[NodeRange, List[NodeVector]] = get_genotype_nodes_by_node_range(
        mean_frag_len, vcf_path, locus
    )
    diplotypes = enumerate_diplotypes(locus.graph, genotype_nodes)
    logger.info(f"{locus.locus_id}: {len(diplotypes)} candidate diplotypes")
    return diplotypes
