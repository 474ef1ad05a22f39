"""
Belief Entity
=============

A proposition held with a confidence in [0, 1] and backed by a
justification. Beliefs are immutable: every revision returns a new Belief
that carries the same ``id`` and a fresh ``timestamp``. Confidence is
clamped on construction, never rejected.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .justification import Justification
from .propositions import are_contradictory, clamp_confidence, generate_id, negate_prop, utc_now


class Belief(BaseModel):
    """A proposition held with a confidence level and justification."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: generate_id("belief"))
    proposition: str = Field(..., description="The believed statement, e.g. 'ServerIsHealthy'")
    confidence: float = Field(..., description="Degree of belief, clamped to [0, 1]")
    justification: Justification = Field(default_factory=Justification)
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return clamp_confidence(value)

    # -------------------------------------------------------------------------
    # Revisions
    # -------------------------------------------------------------------------

    def with_confidence(self, confidence: float) -> "Belief":
        return Belief(
            id=self.id,
            proposition=self.proposition,
            confidence=confidence,
            justification=self.justification,
        )

    def with_additional_justification(self, justification: Justification) -> "Belief":
        return Belief(
            id=self.id,
            proposition=self.proposition,
            confidence=self.confidence,
            justification=self.justification.merge(justification),
        )

    def with_updates(self, confidence: float, justification: Justification) -> "Belief":
        """New confidence plus merged justification, in one revision."""
        return Belief(
            id=self.id,
            proposition=self.proposition,
            confidence=confidence,
            justification=self.justification.merge(justification),
        )

    def negation(self) -> "Belief":
        """
        Belief over the negated proposition with the same confidence.

        Structural convenience only: no inference is performed and the new
        belief gets its own id.
        """
        return Belief(
            proposition=negate_prop(self.proposition),
            confidence=self.confidence,
            justification=self.justification.clone(),
        )

    def clone(self) -> "Belief":
        return Belief(
            id=self.id,
            proposition=self.proposition,
            confidence=self.confidence,
            justification=self.justification.clone(),
            timestamp=self.timestamp,
        )

    # -------------------------------------------------------------------------
    # Comparisons
    # -------------------------------------------------------------------------

    def contradicts(self, other: "Belief") -> bool:
        # TODO: semantic contradiction (beyond the negation marker) needs an oracle judgment
        return are_contradictory(self.proposition, other.proposition)

    def is_stronger_than(self, other: "Belief") -> bool:
        return self.confidence > other.confidence

    def get_age(self, now: Optional[datetime] = None) -> timedelta:
        """Wall-clock time since this instance was constructed."""
        return (now or utc_now()) - self.timestamp

    def describe(self) -> str:
        return f"{self.proposition} (conf: {self.confidence:.2f})"

    def describe_detailed(self) -> str:
        return (
            f"Belief: {self.proposition}\n"
            f"Confidence: {self.confidence:.2f}\n"
            f"Justification: {self.justification.describe()}"
        )
