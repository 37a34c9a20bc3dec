"""
Output generation for repeat_paths results.

Author: Kevin R. Roy
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence
import pandas as pd
import logging

from ..core.diplotypes import Diplotype
from ..core.kmer_index import KmerIndex
from ..core.summary import summarize_diplotype, summarize_path

logger = logging.getLogger(__name__)


def diplotypes_to_dataframe(locus_id: str, diplotypes: Sequence[Diplotype]) -> pd.DataFrame:
    """
    One row per haplotype of every candidate diplotype.

    Columns: locus, diplotype (index), haplotype (index within the diplotype),
    summary (whole-diplotype summary), haplotype_summary, length (bp) and
    nodes (comma-separated node ids).
    """
    rows = []
    for diplotype_idx, diplotype in enumerate(diplotypes):
        diplotype_summary = summarize_diplotype(diplotype)
        for haplotype_idx, path in enumerate(diplotype):
            rows.append({
                'locus': locus_id,
                'diplotype': diplotype_idx,
                'haplotype': haplotype_idx,
                'summary': diplotype_summary,
                'haplotype_summary': summarize_path(path),
                'length': path.length,
                'nodes': ','.join(str(n) for n in path.nodes),
            })

    columns = ['locus', 'diplotype', 'haplotype', 'summary', 'haplotype_summary', 'length', 'nodes']
    return pd.DataFrame(rows, columns=columns)


def write_diplotypes_tsv(
    diplotypes_by_locus: Dict[str, Sequence[Diplotype]],
    output_path: Path,
) -> Path:
    """
    Write candidate diplotypes of one or more loci to TSV file.

    Args:
        diplotypes_by_locus: Diplotypes keyed by locus id
        output_path: Path for output TSV

    Returns:
        Path to written file
    """
    frames = [diplotypes_to_dataframe(locus_id, diplotypes)
              for locus_id, diplotypes in diplotypes_by_locus.items()]
    df = pd.concat(frames, ignore_index=True) if frames else diplotypes_to_dataframe('', [])
    df.to_csv(output_path, sep='\t', index=False)

    logger.info(f"Wrote {len(df)} haplotypes to {output_path}")

    return output_path


def kmer_index_to_dataframe(index: KmerIndex, kmers: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Summarize a k-mer index, one row per k-mer, sorted by k-mer.

    Args:
        index: K-mer index
        kmers: Restrict to these k-mers (absent ones get num_paths 0)
    """
    if kmers is None:
        kmers = sorted(index.kmers())

    rows = []
    for kmer in kmers:
        paths = index.paths(kmer)
        rows.append({
            'kmer': kmer,
            'num_paths': len(paths),
            'paths': ';'.join(repr(path) for path in paths),
        })

    return pd.DataFrame(rows, columns=['kmer', 'num_paths', 'paths'])


def write_kmer_table(
    index: KmerIndex,
    output_path: Path,
    kmers: Optional[List[str]] = None,
) -> Path:
    """
    Write k-mers and their paths to TSV file.

    Paths are written as (start)[node,node,...](end).

    Returns:
        Path to written file
    """
    df = kmer_index_to_dataframe(index, kmers)
    df.to_csv(output_path, sep='\t', index=False)

    logger.info(f"Wrote {len(df)} k-mers to {output_path}")

    return output_path
