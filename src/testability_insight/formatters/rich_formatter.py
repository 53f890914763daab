"""Rich terminal formatter for Testability Insight."""

import os
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..models import AnalysisResult, FileScore
from .base import BaseFormatter

METRICS_PER_TABLE = 10


def find_base_path(files: List[str]) -> str:
    """Longest common character prefix of all paths ('' for a single file)."""
    if len(files) <= 1:
        return ""
    return os.path.commonprefix(files)


def format_number(value: float) -> float:
    return round(value, 2)


def _metric_keys(scores: List[FileScore]) -> List[str]:
    keys: List[str] = []
    seen = set()
    for file_score in scores:
        for ranked in file_score.metric_ranks:
            if ranked.metric not in seen:
                seen.add(ranked.metric)
                keys.append(ranked.metric)
    return keys


class RichFormatter(BaseFormatter):
    """Score table, plus per-metric tables on request."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, result: AnalysisResult, show_metrics: bool = False) -> None:
        scores = result.report.scores
        base_path = find_base_path([s.file for s in scores])

        self.console.print("[yellow bold underline]Testability analysis results[/yellow bold underline]")
        self.console.print()

        table = Table(title="Scores per file")
        table.add_column("FILE", justify="left")
        table.add_column("SCORE", style="cyan", justify="right")
        for file_score in scores:
            table.add_row(
                file_score.file.replace(base_path, "", 1),
                str(format_number(file_score.score)),
            )
        table.add_row("_______", "_____")
        average = result.average
        table.add_row("AVERAGE", "-" if average is None else str(format_number(average)))
        self.console.print(table)

        if result.report.unscored:
            self.console.print(
                f"[yellow]{len(result.report.unscored)} file(s) had no rankable metrics[/yellow]"
            )
        if result.skipped:
            self.console.print(
                f"[yellow]{len(result.skipped)} file(s) skipped because they could not be analyzed[/yellow]"
            )

        if show_metrics:
            self._print_metric_tables(scores, base_path)

    def format(self, result: AnalysisResult, show_metrics: bool = False) -> str:
        # Rich output goes directly to console; return empty string
        self.render(result, show_metrics)
        return ""

    def _print_metric_tables(self, scores: List[FileScore], base_path: str) -> None:
        keys = _metric_keys(scores)
        pages = (len(keys) + METRICS_PER_TABLE - 1) // METRICS_PER_TABLE
        for page, start in enumerate(range(0, len(keys), METRICS_PER_TABLE), start=1):
            current = keys[start:start + METRICS_PER_TABLE]
            table = Table(title=f"Metric scores (values) per file - {page} / {pages}")
            table.add_column("FILE", justify="left")
            for key in current:
                table.add_column(key, justify="right")
            for file_score in scores:
                cells = {
                    r.metric: f"{round(100 - r.normalized_rank)} ({round(r.value)})"
                    for r in file_score.metric_ranks
                }
                table.add_row(
                    file_score.file.replace(base_path, "", 1),
                    *(cells.get(key, "") for key in current),
                )
            self.console.print(table)
