"""Analysis-related exceptions: file access, parsing, per-file metrics."""

from pathlib import Path
from typing import Union

from .base import TestabilityInsightError

PathLike = Union[str, Path]


class AnalysisError(TestabilityInsightError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when every grammar variant failed to parse a file."""

    def __init__(self, filepath: PathLike, dialect: str, reason: str):
        super().__init__(
            f"Failed to parse {dialect} file: {filepath}",
            details={"filepath": str(filepath), "dialect": dialect, "reason": reason},
        )
        self.filepath = filepath
        self.dialect = dialect
        self.reason = reason


class ComplexityError(AnalysisError):
    """Raised when complexity or coupling metrics cannot be computed for a file."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Failed to compute metrics for {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class NoEligibleMetricsError(AnalysisError):
    """Raised when a file has no metric the reference dataset can rank.

    The accumulated rank of such a file is a mean over zero values.
    """

    def __init__(self, filepath: PathLike):
        super().__init__(
            f"No rankable metrics for {filepath}",
            details={"filepath": str(filepath)},
        )
        self.filepath = filepath
