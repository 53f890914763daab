"""Run-level errors: analysis root, settings and reference data.

Unlike ``AnalysisError`` these abort the whole run.
"""

from pathlib import Path
from typing import Any, Optional, Union

from .base import TestabilityInsightError


class ConfigurationError(TestabilityInsightError):
    """Base class for errors that stop a run before or during scoring."""


class InvalidPathError(ConfigurationError):
    """The analysis root is missing, not a directory or cannot be listed."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"Cannot analyze {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A configuration value failed validation."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Bad value for '{key}': {value!r}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ReferenceDatasetError(ConfigurationError):
    """The reference dataset cannot be read or has the wrong shape."""

    def __init__(self, reason: str, source: Optional[Path] = None):
        details = {"reason": reason}
        if source is not None:
            details["source"] = str(source)
        super().__init__(f"Unusable reference dataset: {reason}", details=details)
        self.reason = reason
        self.source = source
