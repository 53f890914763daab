"""Source file discovery.

Walks a directory tree and returns the JavaScript/TypeScript files worth
analyzing. Which directories are pruned and which files are kept is decided
by a ``DiscoveryPolicy``; the walk itself has no hard-coded names.

Example:
    >>> discoverer = FileDiscoverer()
    >>> paths = discoverer.discover(Path("/path/to/project"))
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .config import DiscoveryPolicy
from .logging_config import get_logger

logger = get_logger(__name__)


class FileDiscoverer:
    """Recursive file enumerator driven by a ``DiscoveryPolicy``."""

    def __init__(self, policy: Optional[DiscoveryPolicy] = None) -> None:
        self.policy = policy or DiscoveryPolicy()
        self._test_dir = self.policy.test_dir_regex
        self._skip_file = self.policy.skip_file_regex
        self._file_types = frozenset(self.policy.file_types)

    def discover(self, root: Union[str, Path]) -> list[str]:
        """Return absolute paths of all analyzable files below ``root``.

        Entries are visited in name order so repeated runs yield the same
        sequence. An empty list is a valid result.

        Raises:
            OSError: If ``root`` cannot be listed
        """
        root_path = Path(root).resolve()
        paths: list[str] = []
        self._walk(root_path, paths)
        logger.debug(f"Discovered {len(paths)} files under {root_path}")
        return paths

    def _walk(self, directory: Path, paths: list[str]) -> None:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                if self.is_excluded_dir(entry.name):
                    logger.debug(f"Pruning directory {entry.path}")
                    continue
                self._walk(Path(entry.path), paths)
            elif entry.is_file() and self.is_included_file(entry.name):
                paths.append(entry.path)

    def is_excluded_dir(self, name: str) -> bool:
        """True if a directory with this name is pruned with its subtree."""
        if any(fragment in name for fragment in self.policy.excluded_dir_fragments):
            return True
        return self._test_dir.search(name.lower()) is not None

    def is_included_file(self, name: str) -> bool:
        """True if a file with this name is analyzed."""
        extension = os.path.splitext(name)[1].lstrip(".")
        if extension not in self._file_types:
            return False
        return self._skip_file.search(name) is None
