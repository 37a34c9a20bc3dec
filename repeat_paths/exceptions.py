"""
Error types raised while building candidate diplotypes.

Author: Kevin R. Roy
"""


class RepeatPathsError(Exception):
    """Base class for recoverable errors caused by the input data."""


class GenotypeNotFoundError(RepeatPathsError, LookupError):
    """The call file has no record for the requested variant."""

    def __init__(self, variant_id: str):
        self.variant_id = variant_id
        super().__init__(f"No VCF record for {variant_id}")


class MissingGenotypeError(RepeatPathsError):
    """The call file records an explicit no-call for the variant."""

    def __init__(self, variant_id: str):
        self.variant_id = variant_id
        super().__init__(f"Genotype of {variant_id} is missing")


class MalformedGenotypeError(RepeatPathsError, ValueError):
    """Genotype field is not of the form 'a' or 'a/b'."""


class UnsupportedVariantTypeError(RepeatPathsError, ValueError):
    """Locus contains a variant that is not a repeat (e.g. '(A|T)')."""


class InconsistentAlleleCountError(RepeatPathsError, ValueError):
    """Variants disagree on the number of alleles, or have more than two."""


class LocusContractError(AssertionError):
    """
    Malformed locus description or graph/region pairing.

    Indicates a defect upstream of this package and is never caught here.
    """
