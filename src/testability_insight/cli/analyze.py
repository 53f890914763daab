"""Main scoring command."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..api import analyze
from ..exceptions import (
    ConfigurationError,
    InvalidPathError,
    ReferenceDatasetError,
    TestabilityInsightError,
)
from ..formatters import JsonFormatter, RichFormatter
from ..logging_config import setup_logging
from . import app
from ._common import console, err_console, resolve_config


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="Project directory to scan (default: current directory)",
        show_default=False,
    ),
    metrics: bool = typer.Option(
        False,
        "--metrics",
        help="Also show every metric's score and raw value per file",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    reference: Optional[Path] = typer.Option(
        None,
        "--reference",
        help="Reference dataset JSON (default: bundled dataset)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    rank_policy: Optional[str] = typer.Option(
        None,
        "--rank-policy",
        help="Normalized rank policy: exact | insertion",
        click_type=click.Choice(["exact", "insertion"], case_sensitive=False),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Calculate testability scores for the JS/TS files in a directory.

    Every file gets a score from 0 to 100; a higher score means better
    testability. Test, fixture and dependency directories are skipped.

    [bold cyan]Examples:[/bold cyan]

      testability-insight

      testability-insight src/

      testability-insight /path/to/project --metrics

      testability-insight . --json --rank-policy insertion
    """
    from .. import __version__

    if version:
        console.print(
            f"[bold cyan]Testability Insight[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    try:
        settings = resolve_config(
            config=config,
            reference=reference,
            rank_policy=rank_policy.lower() if rank_policy else None,
            verbose=verbose,
            quiet=quiet,
        )
    except TestabilityInsightError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.verbosity)

    try:
        result = analyze(path, config=settings)
    except InvalidPathError as e:
        err_console.print(f"[red]Illegal path:[/red] {e.path} ({e.reason})")
        raise typer.Exit(1)
    except ReferenceDatasetError as e:
        err_console.print(f"[red]Score calculation failed:[/red] {e}")
        raise typer.Exit(1)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        JsonFormatter().render(result, show_metrics=metrics)
        return

    if result.is_empty:
        if result.discovered == 0:
            console.print("[red]No files were found[/red]")
        else:
            console.print(
                f"[red]No file could be scored[/red]: {result.discovered} found, "
                f"{len(result.skipped)} skipped, "
                f"{len(result.report.unscored)} without rankable metrics"
            )
        return

    RichFormatter(console).render(result, show_metrics=metrics)
