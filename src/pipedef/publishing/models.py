"""Publish outcome models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PublishOutcome(str, Enum):
    """Final state of one definition in a publish run."""

    VALIDATION_FAILED = "validation_failed"
    CREATED = "created"
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    PUBLISH_ERROR = "publish_error"


# Outcomes that mean the published file did not match what was on disk.
DRIFT_OUTCOMES = (PublishOutcome.CREATED, PublishOutcome.CHANGED)


@dataclass(frozen=True)
class DefinitionResult:
    """Result of publishing a single definition."""

    name: str
    outcome: PublishOutcome
    target_path: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "targetPath": self.target_path,
            "error": self.error,
        }


@dataclass
class RunResult:
    """All definition results of one run and the verdict they add up to."""

    fail_if_changed: bool = False
    results: List[DefinitionResult] = field(default_factory=list)

    @property
    def drifted(self) -> List[DefinitionResult]:
        return [r for r in self.results if r.outcome in DRIFT_OUTCOMES]

    @property
    def success(self) -> bool:
        return not (self.fail_if_changed and self.drifted)

    def count(self, outcome: PublishOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "failIfChanged": self.fail_if_changed,
            "summary": {outcome.value: self.count(outcome) for outcome in PublishOutcome},
            "definitions": [r.to_dict() for r in self.results],
        }


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a single definition without publishing it."""

    name: str
    target_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "valid": self.valid,
            "targetPath": self.target_path,
            "error": self.error,
        }
