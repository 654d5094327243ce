"""
Pipeline data records.

Records are plain dataclasses rendered by ``pipedef.helpers.serialization``.
"""

from .steps import Step
from .tasks import BashFileTask, BashTask, InlineBashTask

__all__ = [
    "Step",
    "BashTask",
    "InlineBashTask",
    "BashFileTask",
]
