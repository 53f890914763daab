"""Base formatter interface for Testability Insight output rendering."""

from abc import ABC, abstractmethod

from ..models import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: AnalysisResult, show_metrics: bool = False) -> None:
        """Render results to stdout."""

    @abstractmethod
    def format(self, result: AnalysisResult, show_metrics: bool = False) -> str:
        """Return formatted string representation of results."""
