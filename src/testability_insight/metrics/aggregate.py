"""Summary statistics for metrics measured once per function."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

import numpy as np

# AggregateStat field -> suffix used in reference dataset keys (e.g. ``fn_cyclomatic_avg``)
AGGREGATE_SUFFIXES = {
    "total": "total",
    "average": "avg",
    "median": "med",
    "min": "min",
    "max": "max",
}


@dataclass(frozen=True)
class AggregateStat:
    """total/average/median/min/max of per-function values.

    Every summary is None when there were no functions. ``values`` keeps the
    per-function order and is never ranked.
    """

    total: Optional[float] = None
    average: Optional[float] = None
    median: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    values: tuple[float, ...] = field(default_factory=tuple)

    def summaries(self) -> Iterator[tuple[str, Optional[float]]]:
        """Yield ``(suffix, value)`` for each summary field, ``values`` excluded."""
        for name, suffix in AGGREGATE_SUFFIXES.items():
            yield suffix, getattr(self, name)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "avg": self.average,
            "med": self.median,
            "min": self.min,
            "max": self.max,
            "values": list(self.values),
        }


def total(values: Sequence[float]) -> Optional[float]:
    if len(values) == 0:
        return None
    return sum(values)


def average(values: Sequence[float]) -> Optional[float]:
    if len(values) == 0:
        return None
    return sum(values) / len(values)


def median(values: Sequence[float]) -> Optional[float]:
    """Middle value; mean of the two middle values for even lengths.

    None (not 0) for an empty sequence.
    """
    if len(values) == 0:
        return None
    return float(np.median(np.asarray(values, dtype=float)))


def aggregate(values: Sequence[float]) -> AggregateStat:
    """Fold per-function values into an ``AggregateStat``."""
    values = tuple(values)
    if not values:
        return AggregateStat()
    return AggregateStat(
        total=total(values),
        average=average(values),
        median=median(values),
        min=min(values),
        max=max(values),
        values=values,
    )
