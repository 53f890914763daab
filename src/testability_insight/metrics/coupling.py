"""Heuristic import coupling between discovered files.

Efferent coupling counts the imports a file makes. Afferent coupling is
guessed, not resolved: the last path segment of every import literal is
matched against the file names of the other analyzed files, so both
coincidental overlaps and aliased paths slip through.
"""

from __future__ import annotations

import os
from typing import Any, Iterable, Mapping, Optional, Protocol

from ..exceptions import AnalysisError
from ..logging_config import get_logger
from ..models import FileRecord
from ..parsing.nodes import CALL_TYPE, IMPORT_TYPE, import_source, iter_nodes
from ..parsing.parser import SourceParser, TreeSitterParser, read_source

logger = get_logger(__name__)


class NameMatcher(Protocol):
    def candidate(self, import_path: str) -> str:
        """Module name an import literal refers to."""
        ...

    def matches(self, candidate: str, file_path: str) -> bool:
        """True if ``file_path`` is taken to be the imported module."""
        ...


class NaiveNameMatcher:
    """Last ``/`` segment of the import, substring of the target's file name."""

    def candidate(self, import_path: str) -> str:
        return import_path.split("/")[-1]

    def matches(self, candidate: str, file_path: str) -> bool:
        return candidate in os.path.basename(file_path)


def extract_imports(root: Any) -> list[str]:
    """Literal sources of all import statements and require/import calls."""
    imports = []
    for node in iter_nodes(root):
        if node.type not in (IMPORT_TYPE, CALL_TYPE):
            continue
        source = import_source(node)
        if source is not None:
            imports.append(source)
    return imports


class CouplingEstimator:
    """Fills ``efferent_coupling`` and ``afferent_coupling`` of file records."""

    def __init__(
        self,
        parser: Optional[SourceParser] = None,
        matcher: Optional[NameMatcher] = None,
    ) -> None:
        self.parser = parser or TreeSitterParser()
        self.matcher = matcher or NaiveNameMatcher()

    def estimate(
        self,
        records: Mapping[str, FileRecord],
        paths: Optional[Iterable[str]] = None,
    ) -> list[str]:
        """Re-parse every file and update coupling counters in one sweep.

        Args:
            records: Records whose counters are updated
            paths: Every discovered file; defaults to the record paths. A
                path without a record still counts towards the afferent
                coupling of the files it imports.

        Returns:
            Record paths whose imports could not be read; their own efferent
            count stays 0 and they add nothing to other files' afferent counts
        """
        failed: list[str] = []
        for path in list(records) if paths is None else paths:
            try:
                tree = self.parser.parse(read_source(path), path)
            except AnalysisError as e:
                if path in records:
                    logger.warning(f"Error in generating coupling stats for file {path}: {e}")
                    failed.append(path)
                else:
                    logger.debug(f"No imports read from skipped file {path}: {e}")
                continue
            self.apply(path, extract_imports(tree.root), records)
        return failed

    def apply(self, path: str, imports: Iterable[str], records: Mapping[str, FileRecord]) -> None:
        """Record the imports of ``path`` against all records.

        ``path`` itself needs no record; it then only feeds afferent counts.
        """
        source = records.get(path)
        for import_path in imports:
            if source is not None:
                source.efferent_coupling += 1
            name = self.matcher.candidate(import_path)
            for other_path, other in records.items():
                if other_path != path and self.matcher.matches(name, other_path):
                    other.afferent_coupling += 1
