"""
Process Command

Walks a directory and writes the rendered context to a file or the console.
"""

from typing import Annotated, List, Optional

import typer

from gitcontext.cli.config_utils import build_cli_args, load_config_from_cli, print_config_summary
from gitcontext.cli.error_handling import handle_error
from gitcontext.cli.utils import console, err_console, handle_keyboard_interrupt, print_header, setup_logging
from gitcontext.core.exceptions import GitContextError
from gitcontext.core.processor import ContextProcessor
from gitcontext.exporters import create_exporter


def process(
    root: Annotated[str, typer.Argument(help="Directory to flatten")],

    # Configuration
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,

    # Output
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Output file (overwritten)")] = None,
    console_output: Annotated[Optional[bool], typer.Option("--console", help="Print to the console instead of a file")] = None,

    # Selection
    exclude: Annotated[Optional[List[str]], typer.Option("--exclude", "-e", help="Additional exclusion pattern (repeatable)")] = None,

    # Template
    template: Annotated[Optional[str], typer.Option("--template", "-t", help="Inline template with #file_* placeholders")] = None,
    template_file: Annotated[Optional[str], typer.Option("--template-file", help="Read the template from a file")] = None,
    preset: Annotated[Optional[str], typer.Option("--preset", help="Named template: default, markdown, xml, plain")] = None,

    # Reading
    encoding: Annotated[Optional[str], typer.Option("--encoding", help="Text encoding of the source files")] = None,
    decode_errors: Annotated[Optional[str], typer.Option("--decode-errors", help="Invalid byte handling: replace (default) or strict")] = None,
    sort: Annotated[Optional[bool], typer.Option("--sort/--no-sort", help="Visit entries in name order")] = None,
    follow_symlinks: Annotated[Optional[bool], typer.Option("--follow-symlinks", help="Descend into symlinked directories")] = None,

    # Diagnostics
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Enable debug logging")] = None,
):
    """
    Flatten a directory into a single context document.

    [bold cyan]Examples:[/bold cyan]

    • Write context.txt: [green]gitcontext process ./my-repo[/green]
    • Custom output: [green]gitcontext process ./my-repo -o out/context.md --preset markdown[/green]
    • Print instead: [green]gitcontext process ./my-repo --console -e "*.lock"[/green]
    """
    cli_args = build_cli_args(
        output=output,
        console=console_output,
        exclude=exclude,
        template=template,
        template_file=template_file,
        preset=preset,
        encoding=encoding,
        decode_errors=decode_errors,
        sort=sort,
        follow_symlinks=follow_symlinks,
        verbose=verbose,
        debug=debug,
    )

    app_config = load_config_from_cli(config_file=config, cli_args=cli_args)
    setup_logging(verbose=app_config.verbose, debug=app_config.debug)

    if app_config.verbose:
        print_header("gitcontext", f"Processing directory: {root}")
        print_config_summary(app_config, target=root)

    try:
        processor = ContextProcessor(app_config)
        exporter = create_exporter(app_config.output.sink, app_config.output.path)
        result = processor.export(root, exporter)
    except GitContextError as e:
        handle_error(e)
    except KeyboardInterrupt:
        handle_keyboard_interrupt()

    if not result.success:
        err_console.print(f"[red]Failed to write output: {'; '.join(result.errors)}[/red]")
        raise typer.Exit(1)

    stats = processor.stats
    if stats.failed:
        err_console.print(f"[yellow]{stats.failed} file(s) could not be read; see log output[/yellow]")

    if app_config.output.sink == 'file':
        console.print(f"Context saved to {result.output_path}", markup=False, soft_wrap=True)
    else:
        err_console.print(f"Processed {result.records_exported} files", markup=False, soft_wrap=True)
