"""
Pipeline orchestration for repeat_paths.

Loci are independent of one another, so a run over many loci is spread over
a process pool, one locus per task.

Author: Kevin R. Roy
"""

from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass
from concurrent.futures import ProcessPoolExecutor, as_completed
import logging

from .config import RunConfig, load_locus
from .core.diplotypes import Diplotype, get_candidate_diplotypes
from .core.kmer_index import KmerIndex
from .core.summary import summarize_diplotype
from .io.output import write_diplotypes_tsv, write_kmer_table

logger = logging.getLogger(__name__)


@dataclass
class LocusResult:
    """Results for a single locus."""
    locus_id: str
    diplotypes: List[Diplotype]
    num_kmers: Optional[int] = None
    kmer_table: Optional[Path] = None

    @property
    def summaries(self) -> List[str]:
        return [summarize_diplotype(d) for d in self.diplotypes]


def analyze_locus(
    locus_path: Path,
    vcf_path: Path,
    mean_fragment_length: int,
    kmer_size: Optional[int] = None,
    output_dir: Optional[Path] = None,
) -> LocusResult:
    """
    Enumerate the candidate diplotypes of a locus and optionally index its k-mers.

    Args:
        locus_path: Locus description YAML
        vcf_path: VCF with repeat genotypes
        mean_fragment_length: Cap on repeat lengths
        kmer_size: If given, build a k-mer index of the locus graph
        output_dir: If given together with kmer_size, write the k-mer table there

    Returns:
        LocusResult
    """
    locus = load_locus(locus_path)
    diplotypes = get_candidate_diplotypes(mean_fragment_length, vcf_path, locus)
    result = LocusResult(locus_id=locus.locus_id, diplotypes=diplotypes)

    if kmer_size is not None:
        index = KmerIndex.build(locus.graph, kmer_size)
        result.num_kmers = len(index)
        if output_dir is not None:
            result.kmer_table = write_kmer_table(
                index, Path(output_dir) / f"{locus.locus_id}.kmers.tsv"
            )

    return result


def run_pipeline(config: RunConfig) -> List[LocusResult]:
    """
    Process all loci of a run configuration.

    Writes diplotypes.tsv (and per-locus k-mer tables) to the output directory.
    Any failing locus aborts the run.

    Returns:
        LocusResult per locus, in configuration order
    """
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Processing {len(config.loci)} loci with {config.threads} workers")

    results = {}
    if config.threads == 1 or len(config.loci) == 1:
        for locus_path in config.loci:
            try:
                results[locus_path] = analyze_locus(
                    locus_path, config.vcf, config.mean_fragment_length, config.kmer_size, output_dir
                )
            except Exception as e:
                logger.error(f"Locus {locus_path} failed: {e}")
                raise
    else:
        with ProcessPoolExecutor(max_workers=config.threads) as executor:
            future_to_locus = {
                executor.submit(
                    analyze_locus, locus_path, config.vcf,
                    config.mean_fragment_length, config.kmer_size, output_dir,
                ): locus_path
                for locus_path in config.loci
            }

            for future in as_completed(future_to_locus):
                locus_path = future_to_locus[future]
                try:
                    results[locus_path] = future.result()
                    logger.info(f"Completed {locus_path} ({len(results)}/{len(config.loci)})")
                except Exception as e:
                    logger.error(f"Locus {locus_path} failed: {e}")
                    raise

    ordered = [results[locus_path] for locus_path in config.loci]
    write_diplotypes_tsv(
        {r.locus_id: r.diplotypes for r in ordered},
        output_dir / 'diplotypes.tsv',
    )
    return ordered
