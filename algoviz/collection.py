"""
collection.py — Array Inputs
============================
Builders and parsers for the integer arrays the sorting and searching
views animate.

Custom input follows the forgiving rules of a browser text box:
tokens are split on commas, each keeps its leading integer (so "12abc"
reads as 12), and tokens without one are dropped.
"""

import random
import re
from typing import List, Optional, Sequence

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def random_array(size: int, low: int = 1, high: int = 100, seed: Optional[int] = None) -> List[int]:
    """`size` random integers in [low, high]."""
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


def random_sorted_array(size: int, low: int = 0, high: int = 99, seed: Optional[int] = None) -> List[int]:
    """Same as random_array, sorted ascending (for the searching view)."""
    return sorted(random_array(size, low=low, high=high, seed=seed))


def parse_int(token: str) -> Optional[int]:
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else None


def parse_custom_array(text: str) -> List[int]:
    """
    "5, 3, x, 8abc" → [5, 3, 8]

    Returns an empty list if nothing numeric was found; callers treat that
    as "keep the previous array".
    """
    values = []
    for token in text.split(","):
        value = parse_int(token)
        if value is not None:
            values.append(value)
    return values


def parse_target(text) -> Optional[int]:
    """Search target from user input.  Empty or non-numeric → None."""
    if text is None:
        return None
    if isinstance(text, bool):
        return None
    if isinstance(text, int):
        return text
    return parse_int(str(text))


def is_sorted(values: Sequence[int]) -> bool:
    return all(values[i] <= values[i + 1] for i in range(len(values) - 1))


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
