"""
Checks for ``pipedef.yaml`` settings files.

Each check returns its findings instead of raising, so callers can report
every problem in one go.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import jsonschema

from ..helpers.utils import load_yaml

SCHEMA_FILE = Path(__file__).parent / "settings-schema.yaml"


def load_schema() -> Dict[str, Any]:
    """Load the bundled settings schema."""
    if not SCHEMA_FILE.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_FILE}")
    return load_yaml(str(SCHEMA_FILE))


def format_schema_error(error: jsonschema.ValidationError) -> str:
    """Render a schema error as ``Path 'a -> b': message``."""
    location = " -> ".join(str(p) for p in error.absolute_path) or "root"
    return f"Path '{location}': {error.message}"


def validate_yaml_syntax(settings_path: str) -> Tuple[bool, str, Dict[str, Any]]:
    """
    Parse a settings file.

    Returns:
        Tuple of (is_valid, error_message, parsed_data)
    """
    try:
        return True, "", load_yaml(settings_path)
    except FileNotFoundError:
        return False, f"File not found: {settings_path}", {}
    except Exception as e:
        return False, f"YAML syntax error: {e}", {}


def validate_settings_schema(
    settings_data: Dict[str, Any], schema: Optional[Dict[str, Any]] = None
) -> Tuple[bool, List[str]]:
    """
    Check parsed settings against the schema (the bundled one by default).

    Returns:
        Tuple of (is_valid, list_of_error_messages)
    """
    if schema is None:
        try:
            schema = load_schema()
        except Exception as e:
            return False, [f"Failed to load schema: {e}"]

    validator = jsonschema.Draft7Validator(schema)
    messages = [format_schema_error(e) for e in validator.iter_errors(settings_data)]
    return not messages, messages


def validate_settings_file(
    settings_path: str,
) -> Tuple[bool, List[str], Dict[str, Any]]:
    """
    Parse a settings file and check it against the schema.

    Returns:
        Tuple of (is_valid, list_of_error_messages, parsed_data)
    """
    parsed, syntax_error, data = validate_yaml_syntax(settings_path)
    if not parsed:
        return False, [syntax_error], {}

    valid, errors = validate_settings_schema(data)
    return valid, errors, data
