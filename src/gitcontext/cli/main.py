#!/usr/bin/env python3
"""
gitcontext CLI Main Application

Typer-based command-line interface with rich formatting.
"""

from typing import Optional

import typer
from rich.console import Console

from gitcontext.cli import __version__
from gitcontext.cli.commands import config, process

console = Console()

app = typer.Typer(
    name="gitcontext",
    help="Flatten a source tree into a single templated context document",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("process")(process.process)
app.add_typer(config.app, name="config", help="Manage gitcontext configuration")


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]gitcontext[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    gitcontext - flatten a directory into one document

    Every text file that survives the exclusion patterns is rendered through
    a template of #file_* placeholders and appended to the output.

    [bold]Quick Start:[/bold]

    • Write context.txt: [cyan]gitcontext process .[/cyan]
    • Print to console: [cyan]gitcontext process . --console[/cyan]
    • Starter config: [cyan]gitcontext config init[/cyan]
    """
    pass


def main():
    """Entry point for the gitcontext console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
