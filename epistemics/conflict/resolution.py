"""
Conflict Resolution Strategies
==============================

A strategy looks at a conflict and proposes new confidences for one or
both sides. Strategies never mutate the conflict or its beliefs; callers
apply the returned ``ConflictResolutionResult``.

Classification (shared by all strategies), with threshold τ:

  |Δ₁| ≥ τ and |Δ₂| ≥ τ   ->  MUTUAL_REVISION
  |Δ₁| ≥ τ only           ->  FIRST_AGENT_REVISION
  |Δ₂| ≥ τ only           ->  SECOND_AGENT_REVISION
  neither                 ->  PERSISTENT (success=False)

``JustificationExchangeStrategy`` compares evidentiary volume (element
counts). ``FrameAwareExchangeStrategy`` asks each side's frame to score the
other side's justification through the oracle.
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..belief.belief import Belief
from ..belief.justification import Justification
from ..exceptions import UnknownAgentFrameError
from ..frames.frame import Frame
from ..oracle import EvidenceOracle
from .models import ConflictResolutionResult, EpistemicConflict, ResolutionType

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_REVISION_THRESHOLD: float = 0.1
DEFAULT_JITTER: float = 0.05
# Volume model: losing side drops harder than the winning side gains
VOLUME_DECREASE: float = 0.1
VOLUME_INCREASE: float = 0.05
VOLUME_SATURATION: int = 5
DEFAULT_FRAME_DIFFERENCE_THRESHOLD: float = 0.5


# =============================================================================
# Base
# =============================================================================

class ConflictResolutionStrategy(ABC):
    """Proposes how a conflict should end."""

    def __init__(self, confidence_revision_threshold: float = DEFAULT_REVISION_THRESHOLD):
        self.confidence_revision_threshold = confidence_revision_threshold

    @abstractmethod
    async def resolve_conflict(self, conflict: EpistemicConflict) -> ConflictResolutionResult:
        ...

    def _classify(
        self,
        conflict: EpistemicConflict,
        new_belief: Belief,
        new_contradictory: Belief,
        belief_delta: float,
        contradictory_delta: float,
    ) -> ConflictResolutionResult:
        first = abs(belief_delta) >= self.confidence_revision_threshold
        second = abs(contradictory_delta) >= self.confidence_revision_threshold

        if first and second:
            result = ConflictResolutionResult(
                success=True,
                type=ResolutionType.MUTUAL_REVISION,
                reason="Both agents adjusted their confidence based on shared justifications",
                updated_belief=new_belief,
                updated_contradictory_belief=new_contradictory,
            )
        elif first:
            result = ConflictResolutionResult(
                success=True,
                type=ResolutionType.FIRST_AGENT_REVISION,
                reason=f"{conflict.agent_id} adjusted confidence based on {conflict.other_agent_id}'s justification",
                updated_belief=new_belief,
            )
        elif second:
            result = ConflictResolutionResult(
                success=True,
                type=ResolutionType.SECOND_AGENT_REVISION,
                reason=f"{conflict.other_agent_id} adjusted confidence based on {conflict.agent_id}'s justification",
                updated_contradictory_belief=new_contradictory,
            )
        else:
            result = ConflictResolutionResult(
                success=False,
                type=ResolutionType.PERSISTENT,
                reason="Justification exchange did not result in significant confidence changes",
            )

        return result.model_copy(update={
            "belief_delta": belief_delta,
            "contradictory_belief_delta": contradictory_delta,
        })


# =============================================================================
# Volume-based exchange
# =============================================================================

class JustificationExchangeStrategy(ConflictResolutionStrategy):
    """
    Simulated justification exchange that weighs evidentiary volume.

    Each side compares its element count with the other side's:
    ``relative = other_count - own_count``. A side facing more evidence loses
    ``0.1 · min(relative, 5) / 5``; a side holding more gains
    ``0.05 · min(-relative, 5) / 5``. Each delta then gets independent
    uniform jitter of ``±jitter/2``; pass ``jitter=0`` for deterministic
    outcomes or a seeded ``rng`` for reproducible ones.
    """

    def __init__(
        self,
        confidence_revision_threshold: float = DEFAULT_REVISION_THRESHOLD,
        jitter: float = DEFAULT_JITTER,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(confidence_revision_threshold)
        self.jitter = jitter
        self.rng = rng or random.Random()

    def volume_delta(self, own: Justification, other: Justification) -> float:
        """Confidence delta for the side holding ``own`` after seeing ``other``."""
        relative = len(other.elements) - len(own.elements)
        if relative > 0:
            delta = -VOLUME_DECREASE * min(relative, VOLUME_SATURATION) / VOLUME_SATURATION
        elif relative < 0:
            delta = VOLUME_INCREASE * min(-relative, VOLUME_SATURATION) / VOLUME_SATURATION
        else:
            delta = 0.0

        if self.jitter:
            delta += (self.rng.random() - 0.5) * self.jitter
        return delta

    async def resolve_conflict(self, conflict: EpistemicConflict) -> ConflictResolutionResult:
        belief = conflict.belief
        contradictory = conflict.contradictory_belief

        belief_delta = self.volume_delta(belief.justification, contradictory.justification)
        contradictory_delta = self.volume_delta(contradictory.justification, belief.justification)

        result = self._classify(
            conflict,
            belief.with_confidence(belief.confidence + belief_delta),
            contradictory.with_confidence(contradictory.confidence + contradictory_delta),
            belief_delta,
            contradictory_delta,
        )
        logger.info(
            "Exchange on %s: %s (delta %+.3f / %+.3f)",
            conflict.proposition, result.type.value, belief_delta, contradictory_delta,
        )
        return result


# =============================================================================
# Oracle-backed exchange
# =============================================================================

class FrameAwareExchangeStrategy(ConflictResolutionStrategy):
    """
    Justification exchange judged by each agent's own frame.

    Each side scores the other side's justification with
    ``Frame.evaluate_external_justification`` and moves toward that score by
    its ``frame_compatibility_weight``:

        new = (1 - w) · conf + w · support

    When neither side moves enough and the two frames are mutually
    incompatible (mean compatibility below ``frame_difference_threshold``),
    the disagreement is attributed to the frames and closed as
    ``FRAME_DIFFERENCE``.
    """

    def __init__(
        self,
        oracle: EvidenceOracle,
        frames: Mapping[str, Frame],
        confidence_revision_threshold: float = DEFAULT_REVISION_THRESHOLD,
        frame_difference_threshold: float = DEFAULT_FRAME_DIFFERENCE_THRESHOLD,
    ):
        super().__init__(confidence_revision_threshold)
        self.oracle = oracle
        self.frames = dict(frames)
        self.frame_difference_threshold = frame_difference_threshold

    def _frame_for(self, agent_id: str, conflict: EpistemicConflict) -> Frame:
        try:
            return self.frames[agent_id]
        except KeyError:
            raise UnknownAgentFrameError(agent_id, conflict_id=conflict.id) from None

    async def _revised(
        self,
        belief: Belief,
        other_justification: Justification,
        frame: Frame,
        other_frame: Frame,
    ) -> Belief:
        support = await frame.evaluate_external_justification(
            belief.proposition, other_justification, other_frame, self.oracle,
        )
        weight = frame.parameters.frame_compatibility_weight
        return belief.with_confidence((1 - weight) * belief.confidence + weight * support)

    async def resolve_conflict(self, conflict: EpistemicConflict) -> ConflictResolutionResult:
        frame = self._frame_for(conflict.agent_id, conflict)
        other_frame = self._frame_for(conflict.other_agent_id, conflict)
        belief = conflict.belief
        contradictory = conflict.contradictory_belief

        new_belief, new_contradictory = await asyncio.gather(
            self._revised(belief, contradictory.justification, frame, other_frame),
            self._revised(contradictory, belief.justification, other_frame, frame),
        )
        belief_delta = new_belief.confidence - belief.confidence
        contradictory_delta = new_contradictory.confidence - contradictory.confidence

        result = self._classify(conflict, new_belief, new_contradictory, belief_delta, contradictory_delta)

        if not result.success:
            compatibility = (frame.get_compatibility(other_frame) + other_frame.get_compatibility(frame)) / 2
            if compatibility < self.frame_difference_threshold:
                result = ConflictResolutionResult(
                    success=True,
                    type=ResolutionType.FRAME_DIFFERENCE,
                    reason=(
                        f"Frames {frame.id} and {other_frame.id} are incompatible "
                        f"(mean compatibility {compatibility:.2f})"
                    ),
                    belief_delta=belief_delta,
                    contradictory_belief_delta=contradictory_delta,
                )

        logger.info(
            "Frame-aware exchange on %s: %s (delta %+.3f / %+.3f)",
            conflict.proposition, result.type.value, belief_delta, contradictory_delta,
        )
        return result
