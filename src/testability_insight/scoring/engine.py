"""Percentile scoring: file records -> ranked, scored files.

For every file:
    1. rank each eligible metric against its reference distribution
       (aggregate metrics once per summary suffix, e.g. ``fn_cyclomatic_avg``)
    2. accumulated_rank = mean of the normalized ranks
    3. score           = 100 - accumulated_rank
       relative_rank   = 100 - accumulated_rank / max(moduleRanks) * 100
       rank            = calc_rank(moduleRanks, accumulated_rank)

Files are returned sorted by ``rank``, highest first.
"""

from __future__ import annotations

from typing import Iterable

from ..exceptions import NoEligibleMetricsError
from ..logging_config import get_logger
from ..metrics.aggregate import AggregateStat
from ..models import FileRecord, FileScore, RankedMetric, ScoreReport
from .ranks import calc_rank, normalized_rank
from .reference import ReferenceDataset

logger = get_logger(__name__)


class ScoringEngine:
    """Scores file records against a ``ReferenceDataset``."""

    def __init__(self, reference: ReferenceDataset, rank_policy: str = "exact") -> None:
        self.reference = reference
        self.rank_policy = rank_policy

    def rank_metrics(self, record: FileRecord) -> list[RankedMetric]:
        """Ranked metrics of one record, in record field order.

        Raises:
            ReferenceDatasetError: If an eligible key's distribution has the
                wrong shape for the record's value
        """
        ranked: list[RankedMetric] = []
        for metric, value in record.metrics():
            if isinstance(value, AggregateStat):
                for suffix, summary in value.summaries():
                    key = f"{metric}_{suffix}"
                    if summary is None or not self.reference.is_eligible(key):
                        continue
                    distribution = self.reference.distribution(metric, suffix)
                    ranked.append(self._ranked(key, summary, distribution))
            elif self.reference.is_eligible(metric):
                ranked.append(self._ranked(metric, value, self.reference.distribution(metric)))
        return ranked

    def _ranked(self, key: str, value: float, distribution: tuple[float, ...]) -> RankedMetric:
        return RankedMetric(
            metric=key,
            value=value,
            rank=calc_rank(distribution, value),
            normalized_rank=normalized_rank(distribution, value, self.rank_policy),
        )

    def score_file(self, record: FileRecord) -> FileScore:
        """Score one record.

        Raises:
            NoEligibleMetricsError: If no metric of the record is rankable
        """
        ranked = self.rank_metrics(record)
        if not ranked:
            raise NoEligibleMetricsError(record.path)

        accumulated = sum(r.normalized_rank for r in ranked) / len(ranked)
        return FileScore(
            file=record.path,
            rank=calc_rank(self.reference.module_ranks, accumulated),
            metric_ranks=tuple(ranked),
            accumulated_rank=accumulated,
            relative_rank=100 - accumulated / self.reference.max_module_rank * 100,
            score=100 - accumulated,
        )

    def score(self, records: Iterable[FileRecord]) -> ScoreReport:
        """Score all records; files without rankable metrics go to ``unscored``."""
        report = ScoreReport()
        for record in records:
            try:
                report.scores.append(self.score_file(record))
            except NoEligibleMetricsError as e:
                logger.warning(str(e))
                report.unscored.append(record.path)
        report.scores.sort(key=lambda s: s.rank, reverse=True)
        return report


def calc_scores(
    records: Iterable[FileRecord],
    reference: ReferenceDataset,
    rank_policy: str = "exact",
) -> ScoreReport:
    """Functional entry point around ``ScoringEngine.score``."""
    return ScoringEngine(reference, rank_policy).score(records)
