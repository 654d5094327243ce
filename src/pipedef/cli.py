#!/usr/bin/env python3
"""
pipedef CLI - publish CI/CD pipeline definitions written in Python to YAML
"""

import sys
from typing import List, Optional

import typer
from rich.console import Console

from . import __version__
from .commands.describe import describe_command
from .commands.publish import publish_command
from .commands.validate import validate_command
from .helpers.error_handler import handle_error
from .helpers.logger import default_log_level, setup_logger

console = Console()


def configure_logging(output_format: str = "TEXT", log_level: str = None):
    """Configure logging based on output format and log level."""
    # CLI option > environment > default
    if log_level is None:
        log_level = default_log_level()

    # For JSON output, send logs to stderr to keep stdout clean
    json_output = output_format.upper() == "JSON"

    try:
        setup_logger("pipedef", log_level, json_output)
    except ValueError as e:
        handle_error(str(e))


def show_help_suggestion():
    """Show helpful suggestions for common mistakes."""
    console.print("\n[yellow]💡 Common usage patterns:[/yellow]")
    console.print("   [cyan]pipedef publish --module pipelines/ci.py[/cyan]")
    console.print(
        "   [cyan]pipedef publish --module pipelines/ci.py --fail-if-changed[/cyan]"
    )
    console.print("   [cyan]pipedef describe --module pipelines/ci.py --output JSON[/cyan]")

    console.print("\n[yellow]📖 For detailed help:[/yellow]")
    console.print("   [cyan]pipedef --help[/cyan]")
    console.print("   [cyan]pipedef <command> --help[/cyan]")


app = typer.Typer(
    help="pipedef - Publish CI/CD pipeline definitions written in Python to YAML",
    no_args_is_help=True,
    add_completion=False,
    epilog="💡 Use 'pipedef <command> --help' for command-specific help",
)


# Global log level option
LOG_LEVEL = None


def _module_option():
    return typer.Option(
        None,
        "--module",
        "-m",
        help="Path to the definitions module (.py file or package directory)",
    )


def _config_option():
    return typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a settings file (defaults to ./pipedef.yaml when present)",
    )


def _search_path_option():
    return typer.Option(
        None,
        "--search-path",
        "-s",
        help="Extra directory to search for the module's imports (repeatable)",
    )


def _output_option():
    return typer.Option(
        "TEXT", "--output", "-o", help="Output format: TEXT (default) or JSON"
    )


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
):
    """pipedef - Publish CI/CD pipeline definitions written in Python to YAML."""
    global LOG_LEVEL
    LOG_LEVEL = log_level


@app.command(
    "publish",
    help="Validate and publish every definition, reporting drift. Example: pipedef publish --module pipelines/ci.py --fail-if-changed",
    rich_help_panel="Pipeline Commands",
)
def publish(
    module: Optional[str] = _module_option(),
    fail_if_changed: Optional[bool] = typer.Option(
        None,
        "--fail-if-changed/--no-fail-if-changed",
        help="Fail when a published file was created or changed (the file is still written)",
    ),
    config: Optional[str] = _config_option(),
    search_path: Optional[List[str]] = _search_path_option(),
    output: str = _output_option(),
):
    """Validate and publish every definition, reporting drift."""
    configure_logging(output, LOG_LEVEL)
    publish_command(module, fail_if_changed, config, search_path, output)


@app.command(
    "validate",
    help="Validate every definition without writing files. Example: pipedef validate --module pipelines/ci.py",
    rich_help_panel="Pipeline Commands",
)
def validate(
    module: Optional[str] = _module_option(),
    config: Optional[str] = _config_option(),
    search_path: Optional[List[str]] = _search_path_option(),
    output: str = _output_option(),
):
    """Validate every definition without writing files."""
    configure_logging(output, LOG_LEVEL)
    validate_command(module, config, search_path, output)


@app.command(
    "describe",
    help="List discovered definitions and their target paths. Example: pipedef describe --module pipelines/ci.py",
    rich_help_panel="Pipeline Commands",
)
def describe(
    module: Optional[str] = _module_option(),
    config: Optional[str] = _config_option(),
    search_path: Optional[List[str]] = _search_path_option(),
    output: str = _output_option(),
):
    """List discovered definitions and their target paths."""
    configure_logging(output, LOG_LEVEL)
    describe_command(module, config, search_path, output)


def _detect_json_output_mode(args: Optional[List[str]] = None) -> bool:
    """
    Detect JSON output from the raw command line, before typer parses it.

    Accepts `--output JSON`, `--output=JSON`, `-o JSON` and `-oJSON`.
    """
    args = sys.argv[1:] if args is None else args
    for i, arg in enumerate(args):
        if arg in ("--output", "-o") and i + 1 < len(args):
            return args[i + 1].upper() == "JSON"
        if arg.startswith("--output="):
            return arg.split("=", 1)[1].upper() == "JSON"
        if arg.startswith("-o") and not arg.startswith("--"):
            return arg[2:].lstrip("=").upper() == "JSON"
    return False


def cli_error_handler():
    """Handle CLI errors and provide helpful suggestions."""
    is_json_output = _detect_json_output_mode()
    try:
        app()
    except Exception as e:
        if not is_json_output:
            console.print(f"[dim]pipedef v{__version__}[/dim]")
            console.print(f"\n[red]❌ Error: {e}[/red]")
            show_help_suggestion()
        sys.exit(1)


if __name__ == "__main__":
    cli_error_handler()
