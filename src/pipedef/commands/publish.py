"""Publish command for pipedef."""

import json
from typing import List, Optional

import typer

from ..config import Settings
from ..errors import PipedefError
from ..helpers.error_handler import handle_error, handle_failure, handle_success
from ..publishing import PublishOrchestrator, PublishOutcome, load_definitions


def publish_command(
    module: Optional[str],
    fail_if_changed: Optional[bool],
    settings_file: Optional[str] = None,
    search_paths: Optional[List[str]] = None,
    output: str = "TEXT",
):
    """Publish every definition in the module and report drift."""
    json_output = output.upper() == "JSON"

    try:
        settings = Settings.resolve(settings_file, module, fail_if_changed, search_paths)
        definitions = load_definitions(settings.module, settings.loader_config())
        result = PublishOrchestrator(settings.fail_if_changed).run(definitions)
    except PipedefError as e:
        if json_output:
            typer.echo(json.dumps({"success": False, "error": str(e)}, indent=2))
            raise typer.Exit(1)
        handle_error(str(e))

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        if not result.success:
            raise typer.Exit(1)
        return

    summary = ", ".join(
        f"{result.count(outcome)} {outcome.value.replace('_', ' ')}"
        for outcome in PublishOutcome
        if result.count(outcome)
    )
    typer.echo(f"\nProcessed {len(result.results)} definition(s): {summary}")

    if not result.success:
        handle_failure(
            f"{len(result.drifted)} definition(s) were not published before this run. "
            "Run 'pipedef publish' and commit the regenerated files."
        )

    handle_success("Publish completed")
