"""
Big-O label vocabulary and output normalization.
"""

import math
import re

CONSTANT = "O(1)"
LOGARITHMIC = "O(log N)"
LINEAR = "O(N)"
LINEARITHMIC = "O(N log N)"
QUADRATIC = "O(N²)"
CUBIC = "O(N³)"
EXPONENTIAL = "O(2^N)"
FACTORIAL = "O(N!)"

VOCABULARY = (
    CONSTANT,
    LOGARITHMIC,
    LINEAR,
    LINEARITHMIC,
    QUADRATIC,
    CUBIC,
    EXPONENTIAL,
    FACTORIAL,
)

_LOWER_N = re.compile(r"n")
_LOG_N = re.compile(r"log\s*N")
_SUPERSCRIPTS = {"N^2": "N²", "N^3": "N³"}


def normalize_label(label: str) -> str:
    """
    Canonicalize a Big-O label.

    >>> normalize_label("O(n logn)")
    'O(N log N)'
    >>> normalize_label("O(n^2)")
    'O(N²)'
    """
    label = _LOWER_N.sub("N", label)
    label = _LOG_N.sub("log N", label)
    for raw, pretty in _SUPERSCRIPTS.items():
        label = label.replace(raw, pretty)
    return label


def maintainability_index(cyclomatic: int, total_lines: int, weight: int) -> int:
    """
    Score readability from 0 to 100.

    Rounds half up so x.5 scores never depend on banker's rounding.
    """
    raw = 100 - cyclomatic * weight - total_lines / 2
    return min(100, max(0, math.floor(raw + 0.5)))
