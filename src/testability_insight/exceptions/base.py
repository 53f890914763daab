"""Root of the Testability Insight exception hierarchy."""

from typing import Dict, Optional


class TestabilityInsightError(Exception):
    """Raised for every failure the package reports on purpose.

    ``details`` carries machine-readable context (file, dialect, key, ...)
    and is appended to the message as ``key=value`` pairs.
    """

    __test__ = False

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
