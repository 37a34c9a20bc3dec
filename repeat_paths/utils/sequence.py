"""
Sequence manipulation utilities.

Node sequences may use IUPAC degenerate base codes; these helpers validate
them and expand them into the concrete sequences they stand for.

Author: Kevin R. Roy
"""

import re
from itertools import product
from typing import Dict, List


IUPAC_CODES: Dict[str, str] = {
    'A': 'A', 'C': 'C', 'G': 'G', 'T': 'T',
    'R': 'AG', 'Y': 'CT', 'K': 'GT', 'M': 'AC',
    'S': 'CG', 'W': 'AT',
    'B': 'CGT', 'D': 'AGT', 'H': 'ACT', 'V': 'ACG',
    'N': 'ACGT',
}

IUPAC_PATTERN = re.compile(r'^[ACGTRYKMSWBDHVN]*$')


def is_valid_sequence(seq: str) -> bool:
    """Check that a sequence (possibly empty) uses uppercase IUPAC codes only."""
    return bool(IUPAC_PATTERN.match(seq))


def is_degenerate(seq: str) -> bool:
    """Check if a sequence contains any base other than A, C, G, T."""
    return any(base not in 'ACGT' for base in seq)


def expand_degenerate_sequence(seq: str) -> List[str]:
    """Expand a sequence with degenerate bases into all concrete sequences.

    Args:
        seq: Sequence over the IUPAC alphabet

    Returns:
        List of ACGT sequences in lexicographic order of the expansions

    Raises:
        ValueError: If seq contains a character that is not an IUPAC code

    Examples:
        >>> expand_degenerate_sequence("AK")
        ['AG', 'AT']
    """
    if not is_degenerate(seq):
        return [seq]

    try:
        options = [IUPAC_CODES[base] for base in seq]
    except KeyError as e:
        raise ValueError(f"Invalid base {e.args[0]!r} in sequence: {seq}") from None

    return [''.join(bases) for bases in product(*options)]
