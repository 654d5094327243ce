"""pipedef - CI/CD pipelines defined as Python classes, published as YAML."""

from .definitions import DefinitionBase, PipelineDefinition, TargetPathType
from .model import BashFileTask, BashTask, InlineBashTask, Step

__version__ = "1.0.0"

__all__ = [
    "DefinitionBase",
    "PipelineDefinition",
    "TargetPathType",
    "Step",
    "BashTask",
    "InlineBashTask",
    "BashFileTask",
    "__version__",
]
