"""Rank lookups against a sorted reference distribution.

Two positions are computed for every value:

    calc_rank        first index + 1 on a verbatim hit, otherwise the
                     insertion point (index of the first greater value,
                     or the length when none is greater)
    normalized_rank  percentage position used for scoring; with the
                     ``exact`` policy only verbatim hits rank above 0

The ``exact`` policy means a value one unit off a reference entry ranks 0
while its ordinal rank is nearly identical. ``insertion`` ranks it by
position instead.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Sequence


def exact_index(sorted_values: Sequence[float], value: float) -> int:
    """Index of the first verbatim occurrence of ``value``, -1 if absent."""
    index = bisect_left(sorted_values, value)
    if index < len(sorted_values) and sorted_values[index] == value:
        return index
    return -1


def calc_rank(sorted_values: Sequence[float], value: float) -> int:
    """Ordinal rank of ``value`` in ``[0, len(sorted_values)]``."""
    index = bisect_left(sorted_values, value)
    if index < len(sorted_values) and sorted_values[index] == value:
        return index + 1
    return index


def normalized_rank(sorted_values: Sequence[float], value: float, policy: str = "exact") -> float:
    """Rank as a percentage of the distribution size.

    Args:
        sorted_values: Non-empty ascending reference distribution
        value: Value to place
        policy: ``exact`` (verbatim hits only) or ``insertion`` (``calc_rank``)
    """
    if policy == "insertion":
        position = calc_rank(sorted_values, value)
    else:
        position = exact_index(sorted_values, value) + 1
    return position / len(sorted_values) * 100
