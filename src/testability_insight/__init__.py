"""
Testability Insight - static testability scores for JavaScript/TypeScript code

Parses every source file of a project, measures structure, complexity and
coupling, and ranks the measurements against a reference population to
produce one score (0-100, higher is more testable) per file.
"""

__version__ = "0.1.0"

from .api import analyze
from .models import AnalysisResult, FileRecord, FileScore, RankedMetric, ScoreReport
from .scoring import ReferenceDataset, load_reference_dataset

__all__ = [
    "analyze",  # Main entry point
    "AnalysisResult",
    "FileRecord",
    "FileScore",
    "RankedMetric",
    "ScoreReport",
    "ReferenceDataset",
    "load_reference_dataset",
]
