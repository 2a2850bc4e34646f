"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()

FORMAT_CHOICES = ("rich", "json", "csv")


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def check_format(fmt: str) -> str:
    if fmt not in FORMAT_CHOICES:
        console.print(
            f"[red]Error:[/red] unknown format {fmt!r}, choose from {', '.join(FORMAT_CHOICES)}"
        )
        raise typer.Exit(2)
    return fmt
