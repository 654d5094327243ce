"""Validate command for pipedef."""

import json
from typing import List, Optional

import typer

from ..config import Settings
from ..errors import PipedefError
from ..helpers.error_handler import handle_error, handle_failure, handle_success
from ..publishing import load_definitions, validate_definitions


def validate_command(
    module: Optional[str],
    settings_file: Optional[str] = None,
    search_paths: Optional[List[str]] = None,
    output: str = "TEXT",
):
    """Validate every definition in the module without writing files."""
    json_output = output.upper() == "JSON"

    try:
        settings = Settings.resolve(settings_file, module, search_paths=search_paths)
        definitions = load_definitions(settings.module, settings.loader_config())
        results = validate_definitions(definitions)
    except PipedefError as e:
        if json_output:
            typer.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
            raise typer.Exit(1)
        handle_error(str(e))

    invalid = [r for r in results if not r.valid]

    if json_output:
        output_data = {
            "valid": not invalid,
            "definitions": [r.to_dict() for r in results],
        }
        typer.echo(json.dumps(output_data, indent=2))
        if invalid:
            raise typer.Exit(1)
        return

    if invalid:
        handle_failure(
            f"{len(invalid)} of {len(results)} definition(s) failed validation: "
            + ", ".join(r.name for r in invalid)
        )

    handle_success(f"All {len(results)} definition(s) are valid")
