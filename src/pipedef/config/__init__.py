"""
Configuration module for pipedef.

Contains the settings model and settings file validation.
"""

from .settings import DEFAULT_SETTINGS_FILE, Settings
from .validation import (
    validate_settings_file,
    validate_settings_schema,
    validate_yaml_syntax,
)

__all__ = [
    "DEFAULT_SETTINGS_FILE",
    "Settings",
    "validate_settings_file",
    "validate_settings_schema",
    "validate_yaml_syntax",
]
