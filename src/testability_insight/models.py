"""Data models for Testability Insight"""

from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .metrics.aggregate import AggregateStat

MetricValue = Union[float, AggregateStat]


@dataclass
class FileRecord:
    """Raw metrics for a single file.

    Scalar fields are file-level figures; ``fn_*`` fields summarise a value
    measured once per function. Only the coupling pass touches a record
    after it is built, and only its two coupling counters.
    """

    path: str

    sloc_physical: int = 0
    sloc_logical: int = 0
    comment_lines: int = 0
    cyclomatic: int = 0
    halstead_bugs: float = 0.0
    halstead_difficulty: float = 0.0
    halstead_effort: float = 0.0
    halstead_length: int = 0
    halstead_time: float = 0.0
    halstead_vocabulary: int = 0
    halstead_volume: float = 0.0
    param_count: int = 0
    maintainability: float = 0.0
    depth: int = 0
    calls: int = 0
    function_count: int = 0
    efferent_coupling: int = 0
    afferent_coupling: int = 0

    fn_sloc_physical: AggregateStat = field(default_factory=AggregateStat)
    fn_sloc_logical: AggregateStat = field(default_factory=AggregateStat)
    fn_cyclomatic: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_bugs: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_difficulty: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_effort: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_length: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_time: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_vocabulary: AggregateStat = field(default_factory=AggregateStat)
    fn_halstead_volume: AggregateStat = field(default_factory=AggregateStat)
    fn_param_count: AggregateStat = field(default_factory=AggregateStat)
    fn_depth: AggregateStat = field(default_factory=AggregateStat)

    def metrics(self) -> Iterator[Tuple[str, MetricValue]]:
        """Yield ``(metric_key, value)`` in declaration order."""
        for f in fields(self):
            if f.name == "path":
                continue
            yield f.name, getattr(self, f.name)

    def to_dict(self) -> dict:
        result: dict = {"path": self.path}
        for key, value in self.metrics():
            result[key] = value.to_dict() if isinstance(value, AggregateStat) else value
        return result


@dataclass(frozen=True)
class RankedMetric:
    """One metric of one file placed in the reference distribution."""

    metric: str
    value: float
    rank: int
    normalized_rank: float


@dataclass(frozen=True)
class FileScore:
    """Final scoring of a file. Higher ``score`` means more testable."""

    file: str
    rank: int
    metric_ranks: Tuple[RankedMetric, ...]
    accumulated_rank: float
    relative_rank: float
    score: float


@dataclass
class ScoreReport:
    """Scores sorted by population rank, highest first."""

    scores: List[FileScore] = field(default_factory=list)
    unscored: List[str] = field(default_factory=list)

    @property
    def average(self) -> Optional[float]:
        if not self.scores:
            return None
        return sum(s.score for s in self.scores) / len(self.scores)


@dataclass
class AnalysisResult:
    """Outcome of a full run over a directory."""

    root: str
    report: ScoreReport
    discovered: int = 0
    skipped: Dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when no file survived discovery and analysis."""
        return not self.report.scores

    @property
    def average(self) -> Optional[float]:
        return self.report.average
