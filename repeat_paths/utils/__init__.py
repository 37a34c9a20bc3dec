"""
Utility modules for repeat_paths.

Author: Kevin R. Roy
"""

from .sequence import (
    IUPAC_CODES,
    expand_degenerate_sequence,
    is_degenerate,
    is_valid_sequence,
)

__all__ = [
    'IUPAC_CODES',
    'is_valid_sequence',
    'is_degenerate',
    'expand_degenerate_sequence',
]
