"""
Publishing module for pipedef.

Loads a definitions module, discovers its definitions and publishes them
with drift detection.
"""

from .change_detector import classify, fingerprint
from .discovery import discover_definitions, is_definition_type
from .loader import LoaderConfig, ModuleLoader, TypeCatalog
from .models import (
    DefinitionResult,
    PublishOutcome,
    RunResult,
    ValidationResult,
)
from .orchestrator import (
    PublishOrchestrator,
    load_definitions,
    publish_all,
    validate_definitions,
)

__all__ = [
    "LoaderConfig",
    "ModuleLoader",
    "TypeCatalog",
    "discover_definitions",
    "is_definition_type",
    "fingerprint",
    "classify",
    "PublishOutcome",
    "DefinitionResult",
    "RunResult",
    "ValidationResult",
    "PublishOrchestrator",
    "publish_all",
    "load_definitions",
    "validate_definitions",
]
