"""
Command-line interface for repeat_paths.

Author: Kevin R. Roy
"""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_KMER_SIZE, DEFAULT_MEAN_FRAGMENT_LENGTH, RunConfig, load_locus
from .exceptions import RepeatPathsError


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


@click.group()
@click.version_option(version=__version__)
def cli():
    """repeat_paths: candidate diplotypes and k-mer indexes for repeat locus graphs."""
    pass


@cli.command()
@click.option('--locus', '-l', type=click.Path(exists=True), required=True,
              help='Locus description YAML (graph and variants)')
@click.option('--vcf', '-v', type=click.Path(exists=True), required=True,
              help='VCF with repeat genotypes')
@click.option('--fragment-length', '-f', type=click.IntRange(min=0),
              default=DEFAULT_MEAN_FRAGMENT_LENGTH,
              help=f'Mean fragment length; longer repeats are capped (default: {DEFAULT_MEAN_FRAGMENT_LENGTH})')
@click.option('--output', '-o', type=click.Path(),
              help='Optional output TSV with one row per haplotype')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def diplotypes(locus, vcf, fragment_length, output, verbose):
    """
    Enumerate candidate diplotypes of a locus.

    Prints one summary per candidate, e.g. (LF)(CAG){3}(RF)/(LF)(CAG){4}(RF).

    \b
    Example:
      repeat-paths diplotypes -l HTT.yaml -v sample.vcf -f 400
    """
    from .core.diplotypes import get_candidate_diplotypes
    from .core.summary import summarize_diplotype
    from .io.output import write_diplotypes_tsv

    _setup_logging(verbose)

    try:
        locus_spec = load_locus(locus)
        candidates = get_candidate_diplotypes(fragment_length, vcf, locus_spec)
    except (ValueError, RepeatPathsError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for diplotype in candidates:
        click.echo(summarize_diplotype(diplotype))

    if output:
        write_diplotypes_tsv({locus_spec.locus_id: candidates}, Path(output))


@cli.command()
@click.option('--locus', '-l', type=click.Path(exists=True), required=True,
              help='Locus description YAML (graph and variants)')
@click.option('--kmer-size', '-k', type=click.IntRange(min=1), default=DEFAULT_KMER_SIZE,
              help=f'K-mer size (default: {DEFAULT_KMER_SIZE})')
@click.option('--query', '-q', multiple=True,
              help='K-mer to look up (repeatable); default reports all k-mers')
@click.option('--output', '-o', type=click.Path(),
              help='Optional output TSV with k-mers and their paths')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def kmers(locus, kmer_size, query, output, verbose):
    """
    Index the k-mers of a locus graph.

    \b
    Example:
      repeat-paths kmers -l HTT.yaml -k 12 -q CAGCAGCAGCAG
    """
    from .core.kmer_index import KmerIndex
    from .io.output import write_kmer_table

    _setup_logging(verbose)

    try:
        locus_spec = load_locus(locus)
    except (ValueError, OSError) as e:
        click.echo(f"Error loading locus: {e}", err=True)
        sys.exit(1)

    index = KmerIndex.build(locus_spec.graph, kmer_size)
    queries = [q.upper() for q in query] if query else None

    if queries:
        for kmer in queries:
            click.echo(f"{kmer}\t{index.count(kmer)}")
    else:
        click.echo(f"{len(index)} distinct {kmer_size}-mers in {locus_spec.locus_id}")
        graph = locus_spec.graph
        for node_id in range(graph.num_nodes):
            click.echo(f"node {node_id}\t{index.unique_kmers_overlapping_node(node_id)}")
        for source, sink in graph.edges:
            click.echo(f"edge {source}->{sink}\t{index.unique_kmers_overlapping_edge(source, sink)}")

    if output:
        write_kmer_table(index, Path(output), queries)


@cli.command()
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True), required=True,
              help='Run configuration YAML')
@click.option('--threads', '-t', type=click.IntRange(min=1),
              help='Override number of worker processes')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def run(config_path, threads, verbose):
    """
    Process every locus listed in a run configuration.

    \b
    Example config:
      loci: [HTT.yaml, FMR1.yaml]
      vcf: sample.vcf
      output_dir: results/
      mean_fragment_length: 400
      kmer_size: 12
      threads: 4
    """
    from .pipeline import run_pipeline

    _setup_logging(verbose)

    try:
        config = RunConfig.from_yaml(config_path)
        if threads:
            config.threads = threads
        results = run_pipeline(config)
    except (ValueError, RepeatPathsError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for result in results:
        click.echo(f"{result.locus_id}: {len(result.diplotypes)} candidate diplotypes")
        for summary in result.summaries:
            click.echo(f"  {summary}")

    click.echo(f"Results written to: {config.output_dir}")


if __name__ == '__main__':
    cli()
