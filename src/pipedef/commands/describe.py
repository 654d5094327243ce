"""Describe command for pipedef."""

import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings
from ..errors import NoDefinitionsFoundError, PipedefError
from ..helpers.error_handler import handle_error
from ..publishing import load_definitions
from ..publishing.discovery import qualified_name


def describe_command(
    module: Optional[str],
    settings_file: Optional[str] = None,
    search_paths: Optional[List[str]] = None,
    output: str = "TEXT",
):
    """List the definitions in the module and where they are published."""
    json_output = output.upper() == "JSON"

    try:
        settings = Settings.resolve(settings_file, module, search_paths=search_paths)
        definitions = load_definitions(settings.module, settings.loader_config())
        if not definitions:
            raise NoDefinitionsFoundError(
                f"No pipeline definitions found in {settings.module}"
            )
    except PipedefError as e:
        if json_output:
            typer.echo(json.dumps({"error": str(e)}, indent=2))
            raise typer.Exit(1)
        handle_error(str(e))

    rows = []
    for definition in definitions:
        try:
            target_path = definition.get_target_path()
        except Exception as e:
            target_path = None
            error = str(e)
        else:
            error = None
        rows.append(
            {
                "name": type(definition).__name__,
                "class": qualified_name(type(definition)),
                "targetPath": target_path,
                "error": error,
            }
        )

    if json_output:
        typer.echo(
            json.dumps({"module": settings.module, "definitions": rows}, indent=2)
        )
        return

    typer.echo(f"Module: {settings.module}")

    table = Table(title=f"{len(rows)} definition(s)")
    table.add_column("Name", style="cyan")
    table.add_column("Class")
    table.add_column("Target path", style="green")
    for row in rows:
        table.add_row(
            row["name"],
            row["class"],
            row["targetPath"] or f"[red]error: {row['error']}[/red]",
        )
    Console().print(table)
