"""JSON formatter for Testability Insight."""

import json
from dataclasses import asdict

from .base import BaseFormatter
from ..models import AnalysisResult


class JsonFormatter(BaseFormatter):
    """Render results as JSON."""

    def render(self, result: AnalysisResult, show_metrics: bool = False) -> None:
        print(self.format(result, show_metrics))

    def format(self, result: AnalysisResult, show_metrics: bool = False) -> str:
        scores = []
        for file_score in result.report.scores:
            data = asdict(file_score)
            if not show_metrics:
                del data["metric_ranks"]
            scores.append(data)
        payload = {
            "root": result.root,
            "average": result.average,
            "scores": scores,
            "unscored": result.report.unscored,
            "skipped": result.skipped,
        }
        return json.dumps(payload, indent=2)
