"""Load a definitions module from disk and list the classes it declares."""

import importlib
import importlib.util
import inspect
import pkgutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import List, Optional, Sequence, Tuple

from ..errors import LoadError
from ..helpers.logger import get_logger

logger = get_logger("publishing.loader")

# Serialization library and definitions library.
DEFAULT_REQUIRED_DEPENDENCIES: Tuple[str, ...] = ("yaml", "pipedef")

# Set on every module this loader executes, so a later load may replace it.
_LOADED_MARKER = "__pipedef_loaded__"


@dataclass
class TypeCatalog:
    """Classes declared by a loaded module, in declaration order."""

    source: str
    types: List[type] = field(default_factory=list)

    @classmethod
    def from_modules(cls, source: str, modules: Sequence[ModuleType]) -> "TypeCatalog":
        # A class bound under several names is listed once, where first seen.
        declared = {}
        for module in modules:
            for obj in vars(module).values():
                if inspect.isclass(obj) and obj.__module__ == module.__name__:
                    declared.setdefault(obj, None)
        return cls(source=source, types=list(declared))


@dataclass
class LoaderConfig:
    """
    Where the loader looks for a module's dependencies.

    The directory of the loaded module is always searched first, followed by
    ``search_paths``.
    """

    search_paths: List[str] = field(default_factory=list)
    required_dependencies: Tuple[str, ...] = DEFAULT_REQUIRED_DEPENDENCIES


class ModuleLoader:
    """
    Loads a definitions module given as a ``.py`` file or a package directory.

    Loading makes the module's directory importable for the rest of the
    process. The loader is meant to be used once per run.
    """

    def __init__(self, config: Optional[LoaderConfig] = None):
        self.config = config or LoaderConfig()
        self._hook_installed = False

    def load(self, path: str) -> TypeCatalog:
        """Import the module at ``path`` and return the classes it declares."""
        artifact = Path(path).expanduser().resolve()
        if not artifact.exists():
            raise LoadError(f"Definitions module not found: {path}")

        if artifact.is_dir():
            if not (artifact / "__init__.py").exists():
                raise LoadError(
                    f"{path} is a directory but not a Python package (missing __init__.py)"
                )
        elif artifact.suffix != ".py":
            raise LoadError(f"Definitions module must be a .py file or a package: {path}")

        self._install_resolution_hook(artifact.parent)
        self._check_dependencies(artifact.parent)

        module_name = artifact.stem if artifact.is_file() else artifact.name
        logger.debug(f"Loading definitions module {module_name} from {artifact}")

        module = self._exec_module(module_name, artifact)
        modules = [module]
        if artifact.is_dir():
            modules.extend(self._import_submodules(module, artifact))

        catalog = TypeCatalog.from_modules(str(artifact), modules)
        logger.debug(f"Found {len(catalog.types)} classes in {artifact}")
        return catalog

    def _install_resolution_hook(self, artifact_dir: Path) -> None:
        if self._hook_installed:
            return

        directories = [str(artifact_dir)] + [
            str(Path(p).expanduser().resolve()) for p in self.config.search_paths
        ]
        for directory in reversed(directories):
            if directory not in sys.path:
                sys.path.insert(0, directory)
                logger.debug(f"Added {directory} to the import path")

        importlib.invalidate_caches()
        self._hook_installed = True

    def _check_dependencies(self, artifact_dir: Path) -> None:
        for dependency in self.config.required_dependencies:
            try:
                found = importlib.util.find_spec(dependency) is not None
            except (ImportError, ValueError):
                found = False

            if not found:
                raise LoadError(
                    f"Failed to find dependency '{dependency}'. Make sure it is installed "
                    f"or available next to the definitions module in {artifact_dir}.",
                    dependency=dependency,
                )

    def _exec_module(self, module_name: str, artifact: Path) -> ModuleType:
        existing = sys.modules.get(module_name)
        if existing is not None and not getattr(existing, _LOADED_MARKER, False):
            raise LoadError(
                f"Cannot load {artifact}: the name '{module_name}' clashes with the "
                f"already imported module {existing!r}. Rename the file."
            )
        self._forget(module_name)

        if artifact.is_dir():
            spec = importlib.util.spec_from_file_location(
                module_name,
                artifact / "__init__.py",
                submodule_search_locations=[str(artifact)],
            )
        else:
            spec = importlib.util.spec_from_file_location(module_name, artifact)

        if spec is None or spec.loader is None:
            raise LoadError(f"Could not load definitions module: {artifact}")

        module = importlib.util.module_from_spec(spec)
        setattr(module, _LOADED_MARKER, True)
        sys.modules[module_name] = module

        try:
            spec.loader.exec_module(module)
        except ModuleNotFoundError as e:
            self._forget(module_name)
            raise LoadError(
                f"Failed to find dependency '{e.name}' required by {artifact}: {e}",
                dependency=e.name,
            ) from e
        except Exception as e:
            self._forget(module_name)
            raise LoadError(f"Error loading {artifact}: {e}") from e

        return module

    def _import_submodules(self, package: ModuleType, artifact: Path) -> List[ModuleType]:
        submodules = []
        for info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
            try:
                submodule = importlib.import_module(info.name)
            except ModuleNotFoundError as e:
                raise LoadError(
                    f"Failed to find dependency '{e.name}' required by {info.name}: {e}",
                    dependency=e.name,
                ) from e
            except Exception as e:
                raise LoadError(f"Error loading {info.name} from {artifact}: {e}") from e
            setattr(submodule, _LOADED_MARKER, True)
            submodules.append(submodule)
        return submodules

    @staticmethod
    def _forget(module_name: str) -> None:
        for name in list(sys.modules):
            if name == module_name or name.startswith(f"{module_name}."):
                del sys.modules[name]
