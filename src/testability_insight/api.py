"""Public API for Testability Insight.

Example:
    >>> from testability_insight import analyze
    >>>
    >>> result = analyze("/path/to/project")
    >>> for file_score in result.report.scores:
    ...     print(file_score.file, round(file_score.score, 2))
    >>> result.average
    61.4
    >>>
    >>> # With customization
    >>> result = analyze("/path/to/project", rank_policy="insertion")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from .config import AnalysisConfig, load_config
from .exceptions import InvalidPathError
from .logging_config import get_logger
from .metrics.collector import MetricsCollector
from .models import AnalysisResult, ScoreReport
from .scoring import ReferenceDataset, calc_scores, load_reference_dataset

logger = get_logger(__name__)


def analyze(
    path: Union[str, Path] = ".",
    config: Optional[AnalysisConfig] = None,
    reference: Optional[ReferenceDataset] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> AnalysisResult:
    """Score every analyzable file below ``path``.

    Steps:
    1. Load configuration (unless ``config`` is given)
    2. Validate the root directory
    3. Discover files and collect per-file metrics; failing files are skipped
    4. Load the reference dataset (unless ``reference`` is given)
    5. Rank and score files against it

    Args:
        path: Project root directory
        config: Ready configuration; bypasses ``config_file`` and ``overrides``
        reference: Ready reference dataset; bypasses ``scoring.reference_path``
        config_file: Optional explicit TOML config file
        **overrides: Configuration overrides (e.g. ``rank_policy="insertion"``)

    Returns:
        AnalysisResult. ``is_empty`` is True when no file could be scored.

    Raises:
        InvalidPathError: If ``path`` is missing, not a directory or unreadable
        InvalidConfigError: If configuration values are invalid
        ReferenceDatasetError: If the reference dataset is unusable
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)

    root = Path(path).resolve()
    if not root.exists():
        raise InvalidPathError(root, "path does not exist")
    if not root.is_dir():
        raise InvalidPathError(root, "path is not a directory")

    logger.info(f"Starting analysis of {root}")
    collector = MetricsCollector(config)
    try:
        collection = collector.calc_for_dir(root)
    except OSError as e:
        raise InvalidPathError(root, str(e)) from e

    result = AnalysisResult(
        root=str(root),
        report=ScoreReport(),
        discovered=collection.discovered,
        skipped=collection.skipped,
    )
    if not collection.records:
        logger.info("No files to score")
        return result

    if reference is None:
        reference = load_reference_dataset(config.scoring.reference_path)

    result.report = calc_scores(
        collection.records.values(), reference, config.scoring.rank_policy
    )
    logger.info(
        f"Scored {len(result.report.scores)} files, "
        f"{len(result.report.unscored)} without rankable metrics"
    )
    return result
