"""
Conflict Detector
=================

Finds contradictory belief pairs. Two beliefs conflict when their
propositions are negation forms of each other and both are held with at
least ``ConfidenceThresholds.conflict`` confidence. Weakly held beliefs are
not worth reconciling.

Detection is pure: it reads belief mappings and returns new
``EpistemicConflict`` objects with status ``detected``.
"""

import logging
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..belief.belief import Belief
from ..belief.propositions import is_negated, negate_prop
from .models import EpistemicConflict

logger = logging.getLogger(__name__)


# =============================================================================
# Thresholds
# =============================================================================

class ConfidenceThresholds(BaseModel):
    """Confidence levels at which an agent acts on, disputes, shares or keeps a belief."""
    model_config = ConfigDict(frozen=True)

    action: float = Field(default=0.7, ge=0.0, le=1.0, description="Minimum confidence to act on a belief")
    conflict: float = Field(default=0.6, ge=0.0, le=1.0, description="Minimum confidence for a contradiction to count")
    communication: float = Field(default=0.5, ge=0.0, le=1.0, description="Minimum confidence to share a belief")
    memory: float = Field(default=0.3, ge=0.0, le=1.0, description="Minimum confidence to keep a belief")


DEFAULT_THRESHOLDS = ConfidenceThresholds()


# =============================================================================
# Detection
# =============================================================================

def detect_conflicts(
    agent_id: str,
    beliefs: Mapping[str, Belief],
    other_agent_id: str,
    other_beliefs: Mapping[str, Belief],
    thresholds: Optional[ConfidenceThresholds] = None,
) -> List[EpistemicConflict]:
    """
    Detect conflicts between two agents' belief sets.

    Parameters
    ----------
    agent_id : str
        Id of the first agent.
    beliefs : mapping of proposition -> Belief
        The first agent's beliefs. Output follows this mapping's order.
    other_agent_id : str
        Id of the second agent.
    other_beliefs : mapping of proposition -> Belief
        The second agent's beliefs.
    thresholds : ConfidenceThresholds, optional
        Only ``thresholds.conflict`` is consulted.

    Returns
    -------
    list[EpistemicConflict]
    """
    threshold = (thresholds or DEFAULT_THRESHOLDS).conflict
    conflicts: List[EpistemicConflict] = []

    for proposition, belief in beliefs.items():
        if belief.confidence < threshold:
            continue
        contradictory = other_beliefs.get(negate_prop(proposition))
        if contradictory is None or contradictory.confidence < threshold:
            continue

        conflict = EpistemicConflict(
            agent_id=agent_id,
            other_agent_id=other_agent_id,
            proposition=proposition,
            belief=belief,
            contradictory_belief=contradictory,
        )
        conflicts.append(conflict)
        logger.info(
            "Conflict detected: %s holds %s, %s holds %s",
            agent_id, belief.describe(), other_agent_id, contradictory.describe(),
        )

    return conflicts


def detect_internal_conflicts(
    agent_id: str,
    beliefs: Mapping[str, Belief],
    thresholds: Optional[ConfidenceThresholds] = None,
) -> List[EpistemicConflict]:
    """
    Detect contradictions inside one agent's belief set.

    Each contradictory pair is reported once, with the asserted (non-negated)
    proposition as ``proposition``.
    """
    threshold = (thresholds or DEFAULT_THRESHOLDS).conflict
    conflicts: List[EpistemicConflict] = []

    for proposition, belief in beliefs.items():
        if is_negated(proposition) or belief.confidence < threshold:
            continue
        contradictory = beliefs.get(negate_prop(proposition))
        if contradictory is None or contradictory.confidence < threshold:
            continue

        conflicts.append(EpistemicConflict(
            agent_id=agent_id,
            other_agent_id=agent_id,
            proposition=proposition,
            belief=belief,
            contradictory_belief=contradictory,
        ))
        logger.info("Internal conflict detected for %s: %s", agent_id, proposition)

    return conflicts
