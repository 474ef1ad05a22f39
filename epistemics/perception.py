"""
Frame inputs: perceptions and goals.

Only the fields a frame consumes are modelled here. The agent loop that
produces perceptions and plans against goals lives outside this package.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .belief.propositions import clamp, generate_id, utc_now


class Perception(BaseModel):
    """A raw observation received by an agent."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: generate_id("perception"))
    data: Any = None
    source: Optional[str] = Field(default=None, description="Sensor, tool or channel the data came from")
    timestamp: datetime = Field(default_factory=utc_now)


class Goal(BaseModel):
    """Something an agent is trying to achieve."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: generate_id("goal"))
    description: str
    priority: float = Field(default=0.5, description="Relative priority, clamped to [0, 1]")

    @field_validator("priority", mode="before")
    @classmethod
    def _clamp_priority(cls, value: Any) -> float:
        return clamp(float(value))
