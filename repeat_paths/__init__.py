"""
repeat_paths - candidate diplotypes and k-mer path indexes for repeat loci.

Author: Kevin R. Roy
"""

__version__ = "0.1.0"
__author__ = "Kevin R. Roy"

from .config import (
    RunConfig,
    load_locus,
)
from .core.diplotypes import enumerate_diplotypes, get_candidate_diplotypes
from .core.graph import Graph
from .core.kmer_index import KmerIndex
from .core.locus import LocusSpecification, VariantSpecification, VariantType
from .core.path import Path
from .core.summary import summarize_diplotype, summarize_path
from .exceptions import (
    GenotypeNotFoundError,
    InconsistentAlleleCountError,
    LocusContractError,
    MalformedGenotypeError,
    MissingGenotypeError,
    RepeatPathsError,
    UnsupportedVariantTypeError,
)

__all__ = [
    "Graph",
    "Path",
    "LocusSpecification",
    "VariantSpecification",
    "VariantType",
    "RunConfig",
    "load_locus",
    "enumerate_diplotypes",
    "get_candidate_diplotypes",
    "summarize_path",
    "summarize_diplotype",
    "KmerIndex",
    "RepeatPathsError",
    "GenotypeNotFoundError",
    "MissingGenotypeError",
    "MalformedGenotypeError",
    "UnsupportedVariantTypeError",
    "InconsistentAlleleCountError",
    "LocusContractError",
    "__version__",
]
