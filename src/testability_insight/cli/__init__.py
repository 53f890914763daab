"""CLI entry point: registers the scoring command."""

import typer

app = typer.Typer(
    name="testability-insight",
    help="Testability Insight - static testability scores for JS/TS projects",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .analyze import main as _main  # noqa: F401, E402
