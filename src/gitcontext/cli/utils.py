"""
CLI Utilities

Shared utilities for CLI commands including logging setup and formatting.
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Set up logging for a CLI run.

    Diagnostics go to stderr so they never mix with rendered output printed
    to stdout.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header for CLI output."""
    if subtitle:
        header_text = f"[bold cyan]{title}[/bold cyan]\n[dim]{subtitle}[/dim]"
    else:
        header_text = f"[bold cyan]{title}[/bold cyan]"

    err_console.print(Panel(header_text, border_style="cyan"))


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask for user confirmation with rich formatting."""
    return typer.confirm(message, default=default)


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
    raise typer.Exit(1)
