"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    reference: Optional[Path] = None,
    rank_policy: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if reference is not None:
        overrides["reference_path"] = str(reference)
    if rank_policy is not None:
        overrides["rank_policy"] = rank_policy
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)
