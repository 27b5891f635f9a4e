import logging

import typer
from rich.console import Console
from rich.padding import Padding
from rich.panel import Panel
from rich.text import Text

from gitcontext.core.exceptions import ErrorCode, GitContextError

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def handle_error(err: GitContextError):
    """Prints a fatal GitContextError as a panel with its suggestions and exits with status 1."""
    logger.debug(f"Fatal error details: {err.get_debug_info()}")

    body = Text(err.message, justify="full")
    if err.error_code != ErrorCode.UNKNOWN_ERROR:
        body.append(f"\nError code: {err.error_code.value}", style="dim")

    console.print()
    console.print(Panel(
        body,
        title=f"[bold red]Error: {type(err).__name__}[/bold red]",
        border_style="red",
        expand=False
    ))

    if err.suggestions:
        console.print("\n[bold green]Suggested solutions:[/bold green]")
        for i, suggestion in enumerate(err.suggestions, 1):
            suggestion_text = Text(f"{i}. {suggestion.action}: {suggestion.description}\n")
            if suggestion.command:
                suggestion_text.append("   Run: ", style="bold")
                suggestion_text.append(suggestion.command, style="cyan")
            console.print(Padding(suggestion_text, (0, 1)))

    console.print(Padding(f"Trace ID: [yellow]{err.context.correlation_id}[/yellow]", (1, 0, 0, 0)))

    raise typer.Exit(code=1)
