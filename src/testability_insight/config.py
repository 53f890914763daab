"""Configuration loading and management for Testability Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in the dataclasses below)
    2. Global config (~/.testability-insight.toml)
    3. Project config (./testability-insight.toml)
    4. Explicit config file
    5. Environment variables (TESTABILITY_* prefix)
    6. Keyword overrides (typically from CLI flags)

Example:
    >>> config = load_config(rank_policy="insertion")
    >>> config.scoring.rank_policy
    'insertion'
    >>> "tsx" in config.discovery.file_types
    True
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional

from .exceptions import InvalidConfigError, TestabilityInsightError

Verbosity = Literal["quiet", "normal", "verbose"]
RankPolicy = Literal["exact", "insertion"]

RANK_POLICIES = ("exact", "insertion")
VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class DiscoveryPolicy:
    """Predicates deciding which files under a root are analyzed.

    Attributes:
        file_types: Allowed extensions, without the leading dot
        excluded_dir_fragments: A directory whose name contains any of these
            is pruned together with its subtree
        test_dir_pattern: Regex applied to the lower-cased directory name;
            a match prunes the directory. ``(?<!crea)(?<!execu)test`` keeps
            names such as ``createst`` or ``executest`` out of the match
        skip_file_pattern: Regex applied to the file name; a match skips
            config, lint, build and minified files
    """

    file_types: tuple[str, ...] = ("js", "ts", "cjs", "mjs", "es6", "jsx", "tsx", "es", "gs")
    excluded_dir_fragments: tuple[str, ...] = (
        "node_modules",
        "instrumented",
        "bower_components",
        "fixture",
    )
    test_dir_pattern: str = r"(?<!crea)(?<!execu)test|spec|cypress"
    skip_file_pattern: str = (
        r"babelrc|eslintrc|prettierrc|commitlintrc|Gruntfile|\.min|fixture|\.conf"
    )

    def __post_init__(self) -> None:
        if not self.file_types:
            raise InvalidConfigError("file_types", self.file_types, "must not be empty")
        for name in ("test_dir_pattern", "skip_file_pattern"):
            pattern = getattr(self, name)
            try:
                re.compile(pattern)
            except re.error as e:
                raise InvalidConfigError(name, pattern, str(e)) from e

    @property
    def test_dir_regex(self) -> re.Pattern[str]:
        return re.compile(self.test_dir_pattern)

    @property
    def skip_file_regex(self) -> re.Pattern[str]:
        return re.compile(self.skip_file_pattern)


@dataclass(frozen=True)
class ParserConfig:
    """Extension lists driving dialect selection.

    Files whose extension is in ``ts_extensions`` are parsed as TypeScript,
    those in ``jsx_extensions`` as JSX, everything else as plain JavaScript.
    """

    ts_extensions: tuple[str, ...] = ("ts", "tsx")
    jsx_extensions: tuple[str, ...] = ("jsx",)


@dataclass(frozen=True)
class ScoringConfig:
    """Percentile scoring options.

    Attributes:
        rank_policy: ``exact`` ranks a value only when it occurs verbatim in
            the reference distribution (0 otherwise); ``insertion`` uses its
            insertion position instead
        reference_path: JSON reference dataset; None selects the bundled one
    """

    rank_policy: RankPolicy = "exact"
    reference_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.rank_policy not in RANK_POLICIES:
            raise InvalidConfigError(
                "rank_policy", self.rank_policy, f"expected one of {', '.join(RANK_POLICIES)}"
            )


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run."""

    discovery: DiscoveryPolicy = field(default_factory=DiscoveryPolicy)
    parser: ParserConfig = field(default_factory=ParserConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.verbosity not in VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(VERBOSITIES)}"
            )


# Flat keys accepted at the top level and routed into a section
_SECTION_KEYS = {
    "rank_policy": "scoring",
    "reference_path": "scoring",
}

_SECTIONS = {
    "discovery": DiscoveryPolicy,
    "parser": ParserConfig,
    "scoring": ScoringConfig,
}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides. ``verbose``/``quiet`` booleans map to
            ``verbosity``; ``rank_policy`` and ``reference_path`` map to the
            scoring section; section names accept dicts.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        TestabilityInsightError: If a config file is missing or unreadable
        InvalidConfigError: If a value is invalid
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".testability-insight.toml"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / "testability-insight.toml"
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        if not Path(config_file).exists():
            raise TestabilityInsightError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml_file(Path(config_file)))

    _merge(merged, _load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    _merge(merged, overrides)

    return _build(merged)


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge ``source`` into ``target``, routing flat keys into sections."""
    for key, value in source.items():
        section = _SECTION_KEYS.get(key)
        if section is not None:
            target.setdefault(section, {})[key] = value
        elif key in _SECTIONS and isinstance(value, dict):
            target.setdefault(key, {}).update(value)
        else:
            target[key] = value


def _build(merged: dict[str, Any]) -> AnalysisConfig:
    kwargs: dict[str, Any] = {}
    for name, cls in _SECTIONS.items():
        section = merged.pop(name, None)
        if section is None:
            continue
        if isinstance(section, cls):
            kwargs[name] = section
            continue
        if not isinstance(section, dict):
            raise InvalidConfigError(name, section, "expected a table")
        known = {f.name for f in fields(cls)}
        unknown = set(section) - known
        if unknown:
            raise InvalidConfigError(name, ", ".join(sorted(unknown)), "unknown keys")
        values = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in section.items()
        }
        kwargs[name] = cls(**values)

    unknown = set(merged) - {f.name for f in fields(AnalysisConfig)}
    if unknown:
        raise InvalidConfigError("config", ", ".join(sorted(unknown)), "unknown keys")
    kwargs.update(merged)
    return AnalysisConfig(**kwargs)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from TESTABILITY_* environment variables.

    Supported environment variables:
        TESTABILITY_VERBOSITY: quiet/normal/verbose
        TESTABILITY_RANK_POLICY: exact/insertion
        TESTABILITY_REFERENCE_PATH: path to a reference dataset JSON file
    """
    result: dict[str, Any] = {}
    for key in ("verbosity", "rank_policy", "reference_path"):
        value = os.environ.get(f"TESTABILITY_{key.upper()}")
        if value:
            result[key] = value
    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        TestabilityInsightError: If TOML support is missing or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise TestabilityInsightError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise TestabilityInsightError(f"Invalid config file '{path}': {e}") from e
