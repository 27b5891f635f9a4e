"""
Configuration Utilities for CLI Commands

Shared helpers for loading configuration from CLI arguments and showing it.
"""

from typing import Any, Dict, Optional

from rich.panel import Panel

from gitcontext.cli.error_handling import handle_error
from gitcontext.cli.utils import err_console
from gitcontext.core.config import AppConfig, ConfigManager
from gitcontext.core.exceptions import ConfigurationError


def build_cli_args(**kwargs: Any) -> Dict[str, Any]:
    """Drop options the user did not pass so they don't override config files."""
    return {
        key: value for key, value in kwargs.items()
        if value is not None and not (isinstance(value, (list, tuple)) and not value)
    }


def load_config_from_cli(
    config_file: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None
) -> AppConfig:
    """
    Load configuration from CLI arguments with proper error handling.

    Args:
        config_file: Optional path to configuration file
        cli_args: Dictionary of CLI arguments to override config

    Returns:
        Validated AppConfig instance

    Raises:
        typer.Exit: If configuration is invalid
    """
    try:
        config_manager = ConfigManager(config_file=config_file)
        app_config = config_manager.load_config(cli_args=cli_args or {})
    except ConfigurationError as e:
        handle_error(e)

    warnings = config_manager.validate_config(app_config)
    if warnings:
        err_console.print("[yellow]Configuration warnings:[/yellow]")
        for warning in warnings:
            err_console.print(f"  • {warning}", markup=False)
        err_console.print()

    return app_config


def print_config_summary(config: AppConfig, target: Optional[str] = None) -> None:
    """Print a summary of the effective configuration."""
    lines = []

    if target:
        lines.append(f"Root: [cyan]{target}[/cyan]")
    if config.output.sink == 'file':
        lines.append(f"Output file: [cyan]{config.output.path}[/cyan]")
    else:
        lines.append("Output: [cyan]console[/cyan]")

    if config.template:
        lines.append("Template: [cyan]inline[/cyan]")
    elif config.template_file:
        lines.append(f"Template file: [cyan]{config.template_file}[/cyan]")
    else:
        lines.append(f"Template preset: [cyan]{config.template_preset}[/cyan]")

    if config.exclude_patterns:
        lines.append(f"Exclusion patterns: [cyan]{len(config.exclude_patterns)}[/cyan]")
    else:
        lines.append("Exclusion patterns: [yellow]none[/yellow]")

    lines.append(f"Encoding: [cyan]{config.encoding}[/cyan]")

    err_console.print(Panel(
        "\n".join(lines),
        title="[bold]Configuration[/bold]",
        border_style="green"
    ))
