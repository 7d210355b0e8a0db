"""Command-line interface for gitdataset."""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TimeElapsedColumn

from gitdataset.exceptions import GitDatasetError
from gitdataset.models import RunConfig, Settings
from gitdataset.pipeline import CompositeReporter, LoggingReporter, RunReporter, extract_dataset

app = typer.Typer(
    name="gitdataset",
    help="Extract commit message / diff datasets from a Git repository",
    add_completion=False,
)
console = Console()
settings = Settings()


class ProgressReporter(RunReporter):
    """Advances a rich progress bar for every saved commit."""

    def __init__(self, progress: Progress, task_id) -> None:
        self.progress = progress
        self.task_id = task_id

    def commit_saved(self, commit_id: str) -> None:
        self.progress.advance(self.task_id)


def configure_logging(level: str) -> None:
    """Route structlog output through a level filter."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"Unknown log level: {level}", param_hint="--log-level")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@app.command()
def extract(
    repository: Path = typer.Option(..., "--repository", "-r", help="Path to the Git repository"),
    output: Path = typer.Option(..., "--output", "-o", help="Path to the output CSV file"),
    extensions: str = typer.Option(..., "--extensions", "-e", help="List of file extensions (comma-separated)"),
    size: int = typer.Option(..., "--size", "-n", help="Size of the dataset"),
    message_len_min: int = typer.Option(settings.message_len_min, "--message-len-min", help="Minimum commit message length"),
    message_len_max: int = typer.Option(settings.message_len_max, "--message-len-max", help="Maximum commit message length"),
    changes_len_min: int = typer.Option(settings.changes_len_min, "--changes-len-min", help="Minimum commit changes length"),
    changes_len_max: int = typer.Option(settings.changes_len_max, "--changes-len-max", help="Maximum commit changes length"),
    show_progress: bool = typer.Option(False, "--show-progress", help="Show progress bar"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (default from GITDATASET_LOG_LEVEL)"),
) -> None:
    """Extract (commit message, commit changes) pairs into a CSV dataset."""
    configure_logging(log_level or settings.log_level)

    try:
        config = RunConfig.from_extension_string(
            extensions,
            size=size,
            message_len_min=message_len_min,
            message_len_max=message_len_max,
            changes_len_min=changes_len_min,
            changes_len_max=changes_len_max,
        )
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "config"
            console.print(f"[bold red]Error:[/bold red] {location}: {error['msg']}")
        raise typer.Exit(1)

    try:
        with Progress(
            SpinnerColumn(),
            TimeElapsedColumn(),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            disable=not show_progress,
            transient=True,
        ) as progress:
            task_id = progress.add_task("Extracting commits...", total=config.size)
            reporter = CompositeReporter([LoggingReporter(), ProgressReporter(progress, task_id)])
            summary = extract_dataset(repository, output, config, reporter=reporter)
    except GitDatasetError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"Total commits processed: {summary.processed}")
    console.print(f"Total commits saved: {summary.saved}")


@app.command()
def version() -> None:
    """Show version information."""
    from gitdataset import __version__

    console.print(f"[bold]gitdataset[/bold] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
