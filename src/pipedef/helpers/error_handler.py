"""Error handling utilities for the pipedef CLI."""

import typer


def handle_error(message: str, exit_code: int = 1) -> None:
    """Handle errors consistently across the CLI."""
    typer.echo(f"❌ Error: {message}", err=True)
    raise typer.Exit(exit_code)


def handle_success(message: str) -> None:
    """Handle success messages consistently across the CLI."""
    typer.echo(f"✅ {message}")


def handle_failure(message: str, exit_code: int = 1) -> None:
    """Report a run that completed but did not pass, then exit."""
    typer.echo(f"❌ {message}")
    raise typer.Exit(exit_code)
