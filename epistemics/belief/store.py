"""
Belief Store
============

One agent's beliefs, keyed by proposition, evaluated under the agent's
current frame. The store is the only place beliefs are replaced: every
formation or revision builds a new immutable ``Belief`` and swaps it in.

Typical flow:

    store = BeliefStore("agent-a", create_frame("efficiency"))
    await store.form_belief("ServerIsHealthy", elements, oracle)
    conflicts = store.detect_conflicts(other_store)
    result = await strategy.resolve_conflict(conflicts[0])
    conflicts[0].apply_result(result)
    store.apply_resolution(conflicts[0])
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from ..conflict.detector import DEFAULT_THRESHOLDS, ConfidenceThresholds, detect_conflicts
from ..conflict.models import EpistemicConflict
from ..frames.frame import Frame
from ..oracle import EvidenceOracle
from .belief import Belief
from .justification import BaseElement, ExternalElement, Justification
from .propositions import negate_prop

logger = logging.getLogger(__name__)


class BeliefStore:
    """Proposition -> Belief mapping for a single agent."""

    def __init__(
        self,
        agent_id: str,
        frame: Frame,
        thresholds: Optional[ConfidenceThresholds] = None,
    ):
        self.agent_id = agent_id
        self.frame = frame
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self._beliefs: Dict[str, Belief] = {}

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def get(self, proposition: str) -> Optional[Belief]:
        return self._beliefs.get(proposition)

    def beliefs(self) -> Dict[str, Belief]:
        return dict(self._beliefs)

    def above_threshold(self, threshold: Optional[float] = None) -> List[Belief]:
        """Beliefs at or above ``threshold``, by default the store's action threshold."""
        if threshold is None:
            threshold = self.thresholds.action
        return [belief for belief in self._beliefs.values() if belief.confidence >= threshold]

    def shareable_beliefs(self) -> List[Belief]:
        return self.above_threshold(self.thresholds.communication)

    def memorable_beliefs(self) -> List[Belief]:
        return self.above_threshold(self.thresholds.memory)

    def __len__(self) -> int:
        return len(self._beliefs)

    def __contains__(self, proposition: object) -> bool:
        return proposition in self._beliefs

    def _install(self, belief: Belief) -> Belief:
        self._beliefs[belief.proposition] = belief
        return belief

    # -------------------------------------------------------------------------
    # Formation and revision
    # -------------------------------------------------------------------------

    async def form_belief(
        self,
        proposition: str,
        elements: Sequence[BaseElement],
        oracle: EvidenceOracle,
    ) -> Belief:
        """Form (or replace) a belief from scratch using the frame's initial confidence."""
        confidence = await self.frame.compute_initial_confidence(proposition, elements, oracle)
        belief = self._install(Belief(
            proposition=proposition,
            confidence=confidence,
            justification=Justification(elements=tuple(elements)),
        ))
        logger.info("%s formed belief %s", self.agent_id, belief.describe())
        return belief

    async def revise(
        self,
        proposition: str,
        new_elements: Sequence[BaseElement],
        oracle: EvidenceOracle,
    ) -> Belief:
        """Fold new evidence into an existing belief, or form one if absent."""
        existing = self._beliefs.get(proposition)
        if existing is None:
            return await self.form_belief(proposition, new_elements, oracle)

        confidence = await self.frame.update_confidence(
            proposition, existing.confidence, existing.justification, new_elements, oracle,
        )
        belief = self._install(existing.with_updates(confidence, Justification(elements=tuple(new_elements))))
        logger.info(
            "%s revised %s: %.2f -> %.2f",
            self.agent_id, proposition, existing.confidence, belief.confidence,
        )
        return belief

    async def process_external_justification(
        self,
        proposition: str,
        justification: Justification,
        source_frame: Frame,
        source_agent_id: str,
        oracle: EvidenceOracle,
    ) -> Optional[Belief]:
        """
        Take in another agent's justification for ``proposition``.

        Without a standing belief, one is formed when the frame-discounted
        score is positive. With one, the justification is folded in as a
        single external element.
        """
        element = ExternalElement(
            source=source_agent_id,
            external_justification=justification,
            source_frame_id=source_frame.id,
        )

        if proposition in self._beliefs:
            return await self.revise(proposition, [element], oracle)

        score = await self.frame.evaluate_external_justification(proposition, justification, source_frame, oracle)
        if score <= 0:
            logger.info("%s ignored justification for %s from %s", self.agent_id, proposition, source_agent_id)
            return None

        belief = self._install(Belief(
            proposition=proposition,
            confidence=score,
            justification=Justification(elements=(element,)),
        ))
        logger.info("%s adopted %s from %s", self.agent_id, belief.describe(), source_agent_id)
        return belief

    async def set_frame(self, frame: Frame, oracle: EvidenceOracle) -> List[Belief]:
        """
        Switch frame and reassess every belief from its evidence.

        Returns the beliefs whose confidence changed.
        """
        previous, self.frame = self.frame, frame
        current = list(self._beliefs.values())
        confidences = await asyncio.gather(
            *(frame.recompute_confidence(b.proposition, b.justification, oracle) for b in current)
        )

        changed: List[Belief] = []
        for belief, confidence in zip(current, confidences):
            if confidence != belief.confidence:
                changed.append(self._install(belief.with_confidence(confidence)))

        logger.info(
            "%s switched frame %s -> %s, %d of %d beliefs changed",
            self.agent_id, previous.id, frame.id, len(changed), len(current),
        )
        return changed

    # -------------------------------------------------------------------------
    # Conflicts
    # -------------------------------------------------------------------------

    def detect_conflicts(self, other: "BeliefStore") -> List[EpistemicConflict]:
        return detect_conflicts(self.agent_id, self._beliefs, other.agent_id, other._beliefs, self.thresholds)

    def apply_resolution(self, conflict: EpistemicConflict) -> List[Belief]:
        """Install this agent's side of a conflict's resolution. Returns installed beliefs."""
        resolution = conflict.resolution
        if resolution is None:
            return []

        updates: List[Belief] = []
        if conflict.agent_id == self.agent_id and resolution.updated_belief is not None:
            updates.append(resolution.updated_belief)
        if conflict.other_agent_id == self.agent_id and resolution.updated_contradictory_belief is not None:
            updates.append(resolution.updated_contradictory_belief)

        for belief in updates:
            self._install(belief)
            logger.info("%s applied resolution: %s", self.agent_id, belief.describe())
        return updates


async def exchange_justifications(
    conflict: EpistemicConflict,
    store: BeliefStore,
    other_store: BeliefStore,
    oracle: EvidenceOracle,
) -> List[Optional[Belief]]:
    """
    Have both sides of a conflict take in each other's justification.

    ``store`` hears the other side's case about ``conflict.proposition``;
    ``other_store`` hears this side's case about its negation.
    """
    return list(await asyncio.gather(
        store.process_external_justification(
            conflict.proposition,
            conflict.contradictory_belief.justification,
            other_store.frame,
            other_store.agent_id,
            oracle,
        ),
        other_store.process_external_justification(
            negate_prop(conflict.proposition),
            conflict.belief.justification,
            store.frame,
            store.agent_id,
            oracle,
        ),
    ))
