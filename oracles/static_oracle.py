"""
Deterministic evidence oracle.

Table-driven judgments for demos and tests: no network, no randomness.
Saliency is read from the frame's own evidence weights, so frame parameters
alone decide how much attention each kind of evidence gets.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from epistemics.belief.justification import BaseElement, ElementKind
from epistemics.frames.frame import Frame
from epistemics.frames.variants import FrameKind
from epistemics.oracle import EvidenceOracle

logger = logging.getLogger(__name__)

KIND_STRENGTHS: Dict[ElementKind, float] = {
    ElementKind.TOOL_RESULT: 0.85,
    ElementKind.OBSERVATION: 0.75,
    ElementKind.TESTIMONY: 0.6,
    ElementKind.INFERENCE: 0.7,
    ElementKind.EXTERNAL: 0.5,
}

# First matching substring of the source id wins
TRUST_RULES = (
    ("tool", 0.8),
    ("agent", 0.7),
)

FRAME_PROPOSITIONS: Dict[FrameKind, List[str]] = {
    FrameKind.EFFICIENCY: [
        "SystemPerformanceIsOptimal",
        "FastResponseTimeIsAchieved",
        "ResourceUtilizationIsEfficient",
    ],
    FrameKind.THOROUGHNESS: [
        "AllCasesAreCovered",
        "TestingIsComprehensive",
        "DocumentationIsComplete",
    ],
    FrameKind.SECURITY: [
        "SystemIsSecureAgainstThreats",
        "DataIsProtected",
        "AccessControlsAreEffective",
    ],
}
DEFAULT_PROPOSITIONS = ["DefaultProposition1", "DefaultProposition2"]


class StaticOracle(EvidenceOracle):
    """
    Evidence oracle with fixed, inspectable answers.

    Args:
        strengths: Element id -> strength overrides
        source_trust: Exact source id -> trust overrides, checked before the substring rules
        default_strength: Strength for element kinds missing from ``KIND_STRENGTHS``
        default_trust: Trust for sources matching no override or rule
        propositions: Frame kind -> propositions to extract
    """

    def __init__(
        self,
        strengths: Optional[Mapping[str, float]] = None,
        source_trust: Optional[Mapping[str, float]] = None,
        default_strength: float = 0.65,
        default_trust: float = 0.6,
        propositions: Optional[Mapping[FrameKind, Sequence[str]]] = None,
    ):
        self.strengths = dict(strengths or {})
        self.trust_overrides = dict(source_trust or {})
        self.default_strength = default_strength
        self.default_trust = default_trust
        self.propositions = {**FRAME_PROPOSITIONS, **dict(propositions or {})}

    async def evidence_strength(self, element: BaseElement, proposition: str) -> float:
        strength = self.strengths.get(element.id, KIND_STRENGTHS.get(element.kind, self.default_strength))
        logger.debug("Strength of %s for %s: %.2f", element.id, proposition, strength)
        return strength

    async def evidence_saliency(self, element: BaseElement, frame: Frame) -> float:
        saliency = frame.weight_for(element.kind)
        logger.debug("Saliency of %s under %s: %.2f", element.id, frame.id, saliency)
        return saliency

    async def source_trust(self, source_id: str, frame: Frame) -> float:
        trust = self.trust_overrides.get(source_id)
        if trust is None:
            trust = next((value for marker, value in TRUST_RULES if marker in source_id), self.default_trust)
        logger.debug("Trust in %s under %s: %.2f", source_id, frame.id, trust)
        return trust

    async def interpret_perception_data(self, payload: Any, frame: Frame) -> Any:
        note = f"Interpreted through {frame.name} frame"
        logger.debug("Interpreting payload under %s", frame.id)
        if isinstance(payload, dict):
            return {**payload, "interpretation": note}
        return {"data": payload, "interpretation": note}

    async def extract_relevant_propositions(self, payload: Any, frame: Frame) -> List[str]:
        propositions = list(self.propositions.get(frame.kind, DEFAULT_PROPOSITIONS))
        logger.debug("Extracted %d propositions under %s", len(propositions), frame.id)
        return propositions
