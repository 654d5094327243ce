"""Utility functions for pipedef."""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logger import get_logger

logger = get_logger("helpers.utils")

# ${NAME} or ${NAME:default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _expand(text: str) -> str:
    def lookup(match: "re.Match[str]") -> str:
        name, default = match.group(1), match.group(2)
        value = os.environ.get(name)
        if value is not None:
            return value
        if default is None:
            logger.debug(f"Environment variable {name} is not set, using ''")
            return ""
        return default

    return _ENV_VAR_PATTERN.sub(lookup, text)


def substitute_env_vars(data: Any) -> Any:
    """
    Expand ``${NAME}`` and ``${NAME:default}`` in every string of a parsed
    settings document. Keys and non-string scalars are left as they are.
    """
    if isinstance(data, str):
        return _expand(data)
    if isinstance(data, dict):
        return {key: substitute_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [substitute_env_vars(item) for item in data]
    return data


def load_yaml(file_path: str) -> Dict[str, Any]:
    """
    Read a YAML settings document with environment variables expanded.

    An empty file gives an empty mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file contains invalid YAML
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML syntax in {file_path}: {e}")

    return substitute_env_vars(data) if data is not None else {}


def find_git_root(start: Optional[Path] = None) -> Optional[Path]:
    """
    Find the closest directory at or above ``start`` that contains ``.git``.

    Returns None when the directory is not inside a git checkout.
    """
    current = (start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        if (directory / ".git").exists():
            return directory
    return None
