"""Command settings, merged from the settings file and command-line options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ConfigError
from ..helpers.logger import get_logger
from ..publishing.loader import DEFAULT_REQUIRED_DEPENDENCIES, LoaderConfig
from .validation import validate_settings_file

logger = get_logger("config.settings")

DEFAULT_SETTINGS_FILE = "pipedef.yaml"


@dataclass
class Settings:
    """Effective settings for one pipedef run."""

    module: Optional[str] = None
    fail_if_changed: bool = False
    search_paths: List[str] = field(default_factory=list)
    required_dependencies: Tuple[str, ...] = DEFAULT_REQUIRED_DEPENDENCIES
    _file_path: Optional[str] = field(default=None, init=False)

    @classmethod
    def from_file(cls, settings_file: str) -> "Settings":
        """Load settings from a YAML file with validation."""
        is_valid, errors, data = validate_settings_file(settings_file)
        if not is_valid:
            raise ConfigError(
                f"Settings validation failed for {settings_file}:\n"
                + "\n".join(f"  - {error}" for error in errors)
            )

        settings = cls.from_dict(data, base_dir=Path(settings_file).resolve().parent)
        settings._file_path = settings_file
        return settings

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_dir: Optional[Path] = None
    ) -> "Settings":
        """Create settings from a parsed settings file; relative paths resolve against base_dir."""

        def resolve(value: str) -> str:
            path = Path(value).expanduser()
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            return str(path)

        module = data.get("module")
        return cls(
            module=resolve(module) if module else None,
            fail_if_changed=data.get("failIfChanged", False),
            search_paths=[resolve(p) for p in data.get("searchPaths", [])],
            required_dependencies=tuple(
                data.get("requiredDependencies", DEFAULT_REQUIRED_DEPENDENCIES)
            ),
        )

    @classmethod
    def resolve(
        cls,
        settings_file: Optional[str] = None,
        module: Optional[str] = None,
        fail_if_changed: Optional[bool] = None,
        search_paths: Optional[List[str]] = None,
    ) -> "Settings":
        """
        Build the effective settings for a command.

        An explicit settings file must exist; otherwise ``pipedef.yaml`` in the
        current directory is used when present. Command-line values win.

        Raises:
            ConfigError: If the settings file is invalid or no module is set.
        """
        if settings_file:
            if not Path(settings_file).exists():
                raise ConfigError(f"Settings file not found: {settings_file}")
            settings = cls.from_file(settings_file)
        elif Path(DEFAULT_SETTINGS_FILE).exists():
            logger.debug(f"Using settings from {DEFAULT_SETTINGS_FILE}")
            settings = cls.from_file(DEFAULT_SETTINGS_FILE)
        else:
            settings = cls()

        if module:
            settings.module = module
        if fail_if_changed is not None:
            settings.fail_if_changed = fail_if_changed
        if search_paths:
            settings.search_paths = list(settings.search_paths) + list(search_paths)

        if not settings.module:
            raise ConfigError(
                f"No definitions module given. Pass --module or set 'module' in {DEFAULT_SETTINGS_FILE}"
            )

        return settings

    def loader_config(self) -> LoaderConfig:
        return LoaderConfig(
            search_paths=list(self.search_paths),
            required_dependencies=tuple(self.required_dependencies),
        )
