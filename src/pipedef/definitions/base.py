"""Base classes for pipeline definitions."""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from ..errors import DefinitionValidationError
from ..helpers.serialization import render_yaml, to_yaml_data
from ..helpers.utils import find_git_root

YAML_SUFFIXES = (".yml", ".yaml")


class TargetPathType(str, Enum):
    """How ``target_file`` is resolved to a path on disk."""

    RELATIVE_TO_GIT_ROOT = "relative_to_git_root"
    RELATIVE_TO_CURRENT_DIR = "relative_to_current_dir"
    ABSOLUTE = "absolute"


class DefinitionBase(ABC):
    """
    A definition that knows where it is published, how to check itself and
    how to write itself out.

    Every concrete subclass found in a definitions module is instantiated
    with no arguments and published by ``pipedef publish``.
    """

    target_path_type: TargetPathType = TargetPathType.RELATIVE_TO_GIT_ROOT

    @property
    @abstractmethod
    def target_file(self) -> str:
        """Path of the generated file, interpreted per ``target_path_type``."""

    @property
    def header(self) -> List[str]:
        """Comment lines written above the generated content."""
        source = f"{type(self).__module__}.{type(self).__qualname__}"
        return [
            "# " + "=" * 76,
            "# GENERATED FILE - DO NOT EDIT MANUALLY",
            "#",
            "# This file is generated by pipedef. To modify:",
            f"#   1. Edit the source definition: {source}",
            "#   2. Run: pipedef publish",
            "#   3. Commit the regenerated file",
            "# " + "=" * 76,
        ]

    def get_target_path(self) -> str:
        """Resolve ``target_file`` to the path the definition is written to."""
        target = self.target_file
        if not target or not str(target).strip():
            raise ValueError(f"{type(self).__name__}.target_file cannot be empty")

        target_path = Path(target)
        if self.target_path_type == TargetPathType.ABSOLUTE:
            if not target_path.is_absolute():
                raise ValueError(
                    f"target_file must be an absolute path when using {TargetPathType.ABSOLUTE.value}, got: {target}"
                )
            return str(target_path)

        if self.target_path_type == TargetPathType.RELATIVE_TO_CURRENT_DIR:
            return str(Path.cwd() / target_path)

        root = find_git_root() or Path.cwd()
        return str(root / target_path)

    def validate(self) -> None:
        """Raise if the definition is not valid. Subclasses add their own checks."""

    @abstractmethod
    def serialize(self) -> str:
        """Render the full file content."""

    def publish(self) -> None:
        """Render the definition and overwrite its target file."""
        path = Path(self.get_target_path())
        content = self.serialize()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)


class PipelineDefinition(DefinitionBase):
    """
    A YAML pipeline built from records, mappings and lists.

    Set ``schema`` to a JSON schema to have the rendered pipeline checked
    during validation.
    """

    schema: Optional[Dict[str, Any]] = None

    @property
    @abstractmethod
    def pipeline(self) -> Any:
        """The pipeline content."""

    def validate(self) -> None:
        super().validate()

        if Path(self.target_file).suffix.lower() not in YAML_SUFFIXES:
            raise DefinitionValidationError(
                type(self).__name__,
                [f"target_file must end with .yml or .yaml, got: {self.target_file}"],
            )

        data = to_yaml_data(self.pipeline)
        if data is None or data == {} or data == []:
            raise DefinitionValidationError(type(self).__name__, ["pipeline is empty"])

        if self.schema is None:
            return

        validator = jsonschema.Draft7Validator(self.schema)
        errors = sorted(
            validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]
        )
        if not errors:
            return

        error_messages = []
        for error in errors:
            path = (
                " -> ".join(str(p) for p in error.absolute_path)
                if error.absolute_path
                else "root"
            )
            error_messages.append(f"Path '{path}': {error.message}")
        raise DefinitionValidationError(type(self).__name__, error_messages)

    def serialize(self) -> str:
        header = "\n".join(self.header)
        content = render_yaml(self.pipeline)
        return f"{header}\n\n{content}" if header else content
