"""
Definitions module for pipedef.

Contains the definition contract that discovered classes implement.
"""

from .base import DefinitionBase, PipelineDefinition, TargetPathType

__all__ = [
    "DefinitionBase",
    "PipelineDefinition",
    "TargetPathType",
]
