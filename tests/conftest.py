"""Shared fixtures for Testability Insight tests."""

from pathlib import Path

import pytest

from testability_insight.parsing import TreeSitterParser
from testability_insight.scoring import ReferenceDataset

INTEGER_METRICS = [
    "sloc_logical",
    "cyclomatic",
    "halstead_length",
    "depth",
    "calls",
    "function_count",
]


@pytest.fixture
def make_tree(tmp_path):
    """Create ``{relative_path: content}`` below a fresh project directory."""

    def _make(files, root: Path = None):
        root = root or tmp_path / "project"
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def parser():
    return TreeSitterParser()


@pytest.fixture
def parse(parser):
    """Parse a snippet as if it lived at ``path``."""

    def _parse(code, path="module.js"):
        return parser.parse(code, path)

    return _parse


@pytest.fixture
def integer_reference():
    """Every value 0..999 present once, so exact ranking always hits."""
    values = list(range(1000))
    return ReferenceDataset.from_dict(
        {
            "metrics": INTEGER_METRICS,
            "values": {name: values for name in INTEGER_METRICS},
            "moduleRanks": [0.5, 1, 2, 3, 5, 8, 13, 21, 50, 100],
        },
        source="integer-reference",
    )


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """No global, project or environment configuration leaks into a test."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for name in ("VERBOSITY", "RANK_POLICY", "REFERENCE_PATH"):
        monkeypatch.delenv(f"TESTABILITY_{name}", raising=False)
    return work
