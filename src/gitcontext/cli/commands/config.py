"""
Config Command

Create, inspect and describe gitcontext configuration files.
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from rich.syntax import Syntax

from gitcontext.cli.config_utils import load_config_from_cli
from gitcontext.cli.utils import confirm_action, console
from gitcontext.core.config import ConfigManager

app = typer.Typer(
    name="config",
    help="Manage gitcontext configuration",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.command("init")
def config_init(
    path: Annotated[str, typer.Argument(help="Where to write the configuration")] = "gitcontext.yaml",
    profile: Annotated[str, typer.Option("--profile", "-p", help="Profile: default, markdown, minimal")] = "default",
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """
    Write a starter configuration file.

    [bold cyan]Examples:[/bold cyan]

    • Default: [green]gitcontext config init[/green]
    • Markdown output: [green]gitcontext config init --profile markdown[/green]
    """
    output_file = Path(path)
    if output_file.exists() and not force:
        if not confirm_action(f"{output_file} exists. Overwrite?"):
            console.print("[yellow]Aborted[/yellow]")
            raise typer.Exit(1)

    if profile not in {"default", "markdown", "minimal"}:
        console.print(f"[red]Unknown profile: {profile}[/red]")
        raise typer.Exit(1)

    ConfigManager().create_example_config(output_file, profile=profile)
    console.print(f"Configuration written to {output_file}", markup=False, soft_wrap=True)


@app.command("show")
def config_show(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """Show the effective configuration after all sources are merged."""
    app_config = load_config_from_cli(config_file=config)
    rendered = yaml.safe_dump(app_config.model_dump(mode='json'), sort_keys=False)
    console.print(Syntax(rendered, "yaml", word_wrap=True))


@app.command("schema")
def config_schema(
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Write the schema to a file")] = None,
):
    """Print the JSON schema of the configuration file."""
    manager = ConfigManager()
    schema = manager.generate_schema(Path(output) if output else None)
    if output:
        console.print(f"Schema written to {output}", markup=False, soft_wrap=True)
    else:
        console.print_json(json.dumps(schema))
