"""Output formatting utilities for CLI."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

console = Console()


def setup_logging(level: str = "WARNING") -> None:
    """Route library logging to stderr through rich.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def print_sql(sql: str) -> None:
    """Print SQL to the terminal with syntax highlighting."""
    console.print(Syntax(sql, "sql", theme="monokai", line_numbers=False))


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)


def warning_message(message: str) -> None:
    """Print warning message.

    Args:
        message: Warning message
    """
    typer.secho(f"! {message}", fg=typer.colors.YELLOW, err=True)


def success_message(message: str) -> None:
    """Print success message.

    Args:
        message: Success message
    """
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
