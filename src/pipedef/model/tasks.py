"""Bash script steps."""

from dataclasses import dataclass
from typing import Any, Optional

from ..helpers.serialization import yaml_field
from .steps import Step


@dataclass
class BashTask(Step):
    """
    Settings shared by inline and file based bash steps.

    Use ``InlineBashTask`` or ``BashFileTask``; this base is not a step on
    its own.
    """

    # Working directory for the script; the runner's sources directory if unset.
    working_directory: Optional[str] = yaml_field(order=113, default=None)
    # Fail the step if anything is written to stderr.
    fail_on_stderr: bool = yaml_field(order=114, default=False)
    # Skip /etc/profile and personal initialization files.
    no_profile: bool = yaml_field(order=115, default=False)
    # Skip ~/.bashrc.
    no_rc: bool = yaml_field(order=200, default=True)

    def __post_init__(self):
        if type(self) is BashTask:
            raise TypeError(
                "BashTask cannot be used directly, use InlineBashTask or BashFileTask"
            )
        super().__post_init__()


@dataclass(init=False)
class InlineBashTask(BashTask):
    """A bash step whose script is written inline, one argument per line."""

    # Always written, even when empty.
    contents: str = yaml_field(order=1, alias="bash", literal=True)

    def __init__(
        self, *script_lines: str, contents: Optional[str] = None, **settings: Any
    ):
        if contents is not None and script_lines:
            raise TypeError("pass either script lines or contents, not both")
        if any(line is None for line in script_lines):
            raise ValueError("script lines cannot be None")
        super().__init__(**settings)
        self.contents = contents if contents is not None else "\n".join(script_lines)


@dataclass(init=False)
class BashFileTask(BashTask):
    """A bash step that runs a script file from the repository."""

    # Fully qualified, or relative to the default working directory.
    file_path: str = yaml_field(order=1, alias="bash", default="")
    arguments: Optional[str] = yaml_field(order=2, default=None)

    def __init__(self, file_path: str, arguments: Optional[str] = None, **settings: Any):
        if not file_path or not file_path.strip():
            raise ValueError("file_path is required and cannot be empty")
        super().__init__(**settings)
        self.file_path = file_path
        self.arguments = arguments
