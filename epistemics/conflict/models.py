"""
Conflict Models
===============

An epistemic conflict is a contradiction between two beliefs, held by two
agents (or one agent at two times), over a proposition and its negation.

Lifecycle (forward only, never reopened):

    detected --> in_progress --> resolved
        |             |
        |             +--------> persistent
        +--> resolved / persistent

Everything about a conflict is fixed at detection except ``status`` and
``resolution``.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..belief.belief import Belief
from ..belief.propositions import generate_id, utc_now
from ..exceptions import InvalidConflictTransitionError

logger = logging.getLogger(__name__)


# =============================================================================
# Enums
# =============================================================================

class ConflictStatus(str, Enum):
    DETECTED = "detected"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    PERSISTENT = "persistent"


class ResolutionType(str, Enum):
    """How a conflict ended."""
    FIRST_AGENT_REVISION = "first_agent_revision"
    SECOND_AGENT_REVISION = "second_agent_revision"
    MUTUAL_REVISION = "mutual_revision"
    FRAME_DIFFERENCE = "frame_difference"
    PERSISTENT = "persistent"


TERMINAL_STATUSES: FrozenSet[ConflictStatus] = frozenset({ConflictStatus.RESOLVED, ConflictStatus.PERSISTENT})

ALLOWED_TRANSITIONS: Dict[ConflictStatus, FrozenSet[ConflictStatus]] = {
    ConflictStatus.DETECTED: frozenset({
        ConflictStatus.IN_PROGRESS,
        ConflictStatus.RESOLVED,
        ConflictStatus.PERSISTENT,
    }),
    ConflictStatus.IN_PROGRESS: TERMINAL_STATUSES,
    ConflictStatus.RESOLVED: frozenset(),
    ConflictStatus.PERSISTENT: frozenset(),
}


# =============================================================================
# Resolution records
# =============================================================================

class ConflictResolution(BaseModel):
    """Outcome attached to a closed conflict."""
    model_config = ConfigDict(frozen=True)

    type: ResolutionType
    reason: str
    timestamp: datetime = Field(default_factory=utc_now)
    updated_belief: Optional[Belief] = None
    updated_contradictory_belief: Optional[Belief] = None


class ConflictResolutionResult(BaseModel):
    """What a resolution strategy concluded; the conflict itself is untouched."""
    model_config = ConfigDict(frozen=True)

    success: bool
    type: ResolutionType
    reason: str
    belief_delta: float = Field(default=0.0, description="Confidence change proposed for the first agent")
    contradictory_belief_delta: float = Field(default=0.0, description="Confidence change proposed for the second agent")
    updated_belief: Optional[Belief] = None
    updated_contradictory_belief: Optional[Belief] = None

    def to_resolution(self) -> ConflictResolution:
        return ConflictResolution(
            type=self.type,
            reason=self.reason,
            updated_belief=self.updated_belief,
            updated_contradictory_belief=self.updated_contradictory_belief,
        )


# =============================================================================
# Conflict
# =============================================================================

class EpistemicConflict(BaseModel):
    """A detected contradiction between two beliefs."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: generate_id("conflict"), frozen=True)
    agent_id: str = Field(..., frozen=True)
    other_agent_id: str = Field(..., frozen=True)
    proposition: str = Field(..., frozen=True, description="The first agent's proposition")
    belief: Belief = Field(..., frozen=True)
    contradictory_belief: Belief = Field(..., frozen=True)
    timestamp: datetime = Field(default_factory=utc_now, frozen=True)
    status: ConflictStatus = ConflictStatus.DETECTED
    resolution: Optional[ConflictResolution] = None

    @property
    def is_closed(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def _transition(self, status: ConflictStatus) -> None:
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidConflictTransitionError(self.id, self.status.value, status.value)
        logger.debug("Conflict %s: %s -> %s", self.id, self.status.value, status.value)
        self.status = status

    def mark_in_progress(self) -> None:
        self._transition(ConflictStatus.IN_PROGRESS)

    def mark_resolved(self, resolution: ConflictResolution) -> None:
        self._transition(ConflictStatus.RESOLVED)
        self.resolution = resolution
        logger.info("Conflict %s resolved: %s (%s)", self.id, resolution.type.value, resolution.reason)

    def mark_persistent(self, reason: str) -> None:
        self._transition(ConflictStatus.PERSISTENT)
        self.resolution = ConflictResolution(type=ResolutionType.PERSISTENT, reason=reason)
        logger.info("Conflict %s persists: %s", self.id, reason)

    def apply_result(self, result: ConflictResolutionResult) -> None:
        """Close the conflict from a strategy result: resolved on success, persistent otherwise."""
        if result.success:
            self.mark_resolved(result.to_resolution())
        else:
            self.mark_persistent(result.reason)

    def describe(self) -> str:
        return (
            f"Conflict {self.id} [{self.status.value}]: "
            f"{self.agent_id} holds {self.belief.describe()} vs "
            f"{self.other_agent_id} holds {self.contradictory_belief.describe()}"
        )
