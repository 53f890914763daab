"""Exception hierarchy for Testability Insight."""

from .analysis import (
    AnalysisError,
    ComplexityError,
    FileAccessError,
    NoEligibleMetricsError,
    ParsingError,
)
from .base import TestabilityInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    ReferenceDatasetError,
)

__all__ = [
    "TestabilityInsightError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ComplexityError",
    "NoEligibleMetricsError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "ReferenceDatasetError",
]
