"""
I/O modules for repeat_paths.

Author: Kevin R. Roy
"""

from .output import (
    diplotypes_to_dataframe,
    kmer_index_to_dataframe,
    write_diplotypes_tsv,
    write_kmer_table,
)

__all__ = [
    'diplotypes_to_dataframe',
    'write_diplotypes_tsv',
    'kmer_index_to_dataframe',
    'write_kmer_table',
]
