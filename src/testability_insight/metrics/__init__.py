"""Per-file metric extraction.

The collector and coupling modules depend on ``testability_insight.models``
and are imported from their own modules, not re-exported here.
"""

from .aggregate import AGGREGATE_SUFFIXES, AggregateStat, aggregate, average, median, total
from .complexity import (
    ComplexityAnalyzer,
    ComplexityMetrics,
    ComplexityReport,
    HalsteadMetrics,
    TreeComplexityAnalyzer,
)
from .tree import calls, comments, depth, each_function

__all__ = [
    "AGGREGATE_SUFFIXES",
    "AggregateStat",
    "aggregate",
    "average",
    "median",
    "total",
    "ComplexityAnalyzer",
    "ComplexityMetrics",
    "ComplexityReport",
    "HalsteadMetrics",
    "TreeComplexityAnalyzer",
    "calls",
    "comments",
    "depth",
    "each_function",
]
