"""Exception types raised by pipedef."""

from typing import List, Optional


class PipedefError(Exception):
    """Base class for errors that abort a pipedef run."""


class ConfigError(PipedefError):
    """Settings are missing or invalid."""


class LoadError(PipedefError):
    """The definitions module or one of its dependencies could not be loaded."""

    def __init__(self, message: str, dependency: Optional[str] = None):
        super().__init__(message)
        self.dependency = dependency


class DefinitionInstantiationError(PipedefError):
    """A discovered definition class could not be constructed."""


class NoDefinitionsFoundError(PipedefError):
    """The loaded module does not declare any pipeline definitions."""


class DefinitionValidationError(ValueError):
    """A definition rejected its own configuration."""

    def __init__(self, definition: str, errors: List[str]):
        self.definition = definition
        self.errors = list(errors)
        super().__init__(
            f"{definition} is invalid:\n" + "\n".join(f"  - {e}" for e in self.errors)
        )
