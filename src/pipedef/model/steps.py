"""Base step record shared by every pipeline task."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..helpers.serialization import yaml_field


@dataclass
class Step:
    """Common settings of a single pipeline step."""

    display_name: Optional[str] = yaml_field(order=100, default=None)
    name: Optional[str] = yaml_field(order=101, default=None)
    enabled: bool = yaml_field(order=102, default=True)
    continue_on_error: bool = yaml_field(order=103, default=False)
    condition: Optional[str] = yaml_field(order=104, default=None)
    timeout_in_minutes: Optional[int] = yaml_field(order=105, default=None)
    env: Dict[str, str] = yaml_field(order=150, default_factory=dict)

    def __post_init__(self):
        """Validate common step settings."""
        if self.timeout_in_minutes is not None and self.timeout_in_minutes <= 0:
            raise ValueError(
                f"timeout_in_minutes must be positive, got: {self.timeout_in_minutes}"
            )
