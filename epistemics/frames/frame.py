"""
Frame Evaluation
================

A frame turns justification evidence into confidence values under one
cognitive bias. Two combination laws are used:

  Frame-Weighted model (tool results, observations, inferences):

      conf' = (1 - w) · conf + w · strength        w = saliency under this frame

  Justification-Source model (testimony, external justifications):

      conf' = (1 - α) · conf + α · trust           α = source_trust_weight

``update_confidence`` folds new elements through these laws strictly in
caller order. ``compute_initial_confidence``, ``recompute_confidence`` and
``evaluate_external_justification`` instead take a saliency-weighted average
over all elements, with the oracle calls for every element fanned out
concurrently:

      Σ(adjusted_strength · saliency) / Σ(saliency)

where ``adjusted_strength`` is the strength multiplied by source trust for
testimony and external elements.

Every oracle call is guarded: exceptions and unusable numbers (non-numeric,
NaN, infinite, outside [0, 1]) become ``DEFAULT_JUDGMENT`` and are logged at
WARNING. Cancellation is never swallowed.
"""

import asyncio
import logging
import math
from typing import Any, Awaitable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..belief.justification import TRUST_MODULATED_KINDS, BaseElement, ElementKind, Justification
from ..belief.propositions import NEUTRAL_CONFIDENCE, clamp_confidence
from ..oracle import DEFAULT_JUDGMENT, EvidenceOracle
from ..perception import Goal, Perception
from .parameters import FrameParameters
from .variants import FrameKind, get_profile

logger = logging.getLogger(__name__)


# =============================================================================
# Oracle guards
# =============================================================================

def sanitize_judgment(value: Any, operation: str = "judgment") -> float:
    """
    Validate a numeric oracle judgment.

    Returns the value as a float when it is a finite number in [0, 1],
    otherwise ``DEFAULT_JUDGMENT``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("Oracle %s returned non-numeric value %r, using %.1f", operation, value, DEFAULT_JUDGMENT)
        return DEFAULT_JUDGMENT
    try:
        value = float(value)
    except (OverflowError, ValueError):
        logger.warning("Oracle %s returned out-of-range value %r, using %.1f", operation, value, DEFAULT_JUDGMENT)
        return DEFAULT_JUDGMENT
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        logger.warning("Oracle %s returned out-of-range value %r, using %.1f", operation, value, DEFAULT_JUDGMENT)
        return DEFAULT_JUDGMENT
    return value


async def guarded_judgment(call: Awaitable[Any], operation: str) -> float:
    """Await an oracle judgment, substituting the default on any failure."""
    try:
        value = await call
    except Exception as exc:
        logger.warning("Oracle %s failed, using %.1f: %s", operation, DEFAULT_JUDGMENT, exc)
        return DEFAULT_JUDGMENT
    return sanitize_judgment(value, operation)


# =============================================================================
# Frame
# =============================================================================

class Frame(BaseModel):
    """
    A named, parameterised policy for weighing evidence.

    Variants share this one implementation; ``kind`` selects the constant
    profile (default parameters and compatibility row) from
    ``FRAME_PROFILES``. Omitted ``id``, ``name``, ``description`` and
    ``parameters`` are filled from the profile. ``parameters`` may also be
    given as a mapping of overrides on top of the profile.
    """
    model_config = ConfigDict(frozen=True)

    kind: FrameKind
    id: str
    name: str
    description: str = ""
    parameters: FrameParameters = Field(default_factory=FrameParameters)

    @model_validator(mode="before")
    @classmethod
    def _apply_profile(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("kind") is None:
            return data

        kind = FrameKind(data["kind"])
        profile = get_profile(kind)
        data = dict(data)
        data.setdefault("id", kind.value)
        data.setdefault("name", profile.name)
        data.setdefault("description", profile.description)

        parameters = data.get("parameters")
        if parameters is None:
            data["parameters"] = FrameParameters().merged(profile.parameter_overrides)
        elif isinstance(parameters, Mapping):
            data["parameters"] = FrameParameters().merged({**profile.parameter_overrides, **parameters})
        return data

    # -------------------------------------------------------------------------
    # Static properties
    # -------------------------------------------------------------------------

    def with_parameters(self, overrides: Mapping[str, Any]) -> "Frame":
        """
        Return a frame of the same kind and id with parameters shallow-merged.

        Raises
        ------
        InvalidFrameParameterError
            On unknown parameter names or out-of-range values.
        """
        return self.model_copy(update={"parameters": self.parameters.merged(overrides)})

    def get_compatibility(self, other: "Frame") -> float:
        """How much this frame credits justifications produced under ``other``."""
        profile = get_profile(self.kind)
        return profile.compatibility.get(other.kind, profile.default_compatibility)

    def weight_for(self, kind: ElementKind) -> float:
        return self.parameters.weight_for(kind)

    def element_contradicts(self, element: BaseElement, proposition: str) -> bool:
        return element.contradicts(proposition)

    def describe(self) -> str:
        return f"{self.name} ({self.id}): {self.description}"

    # -------------------------------------------------------------------------
    # Perception
    # -------------------------------------------------------------------------

    async def interpret_perception(self, perception: Perception, oracle: EvidenceOracle) -> Perception:
        """Copy of ``perception`` whose data is the oracle's reinterpretation."""
        try:
            data = await oracle.interpret_perception_data(perception.data, self)
        except Exception as exc:
            logger.warning("Perception interpretation failed under frame %s, keeping raw data: %s", self.id, exc)
            return perception
        return perception.model_copy(update={"data": data})

    async def get_relevant_propositions(
        self,
        source: Union[Perception, Goal],
        oracle: EvidenceOracle,
    ) -> List[str]:
        """Propositions salient to this frame in a perception or goal."""
        match source:
            case Goal(description=description):
                payload = description
            case Perception(data=data):
                payload = data
            case _:
                raise TypeError(f"Expected Perception or Goal, got {type(source).__name__}")

        try:
            propositions = await oracle.extract_relevant_propositions(payload, self)
        except Exception as exc:
            logger.warning("Proposition extraction failed under frame %s: %s", self.id, exc)
            return []

        if not isinstance(propositions, (list, tuple)):
            logger.warning("Proposition extraction under frame %s returned %r", self.id, type(propositions).__name__)
            return []
        return [prop for prop in propositions if isinstance(prop, str) and prop]

    # -------------------------------------------------------------------------
    # Confidence
    # -------------------------------------------------------------------------

    async def compute_initial_confidence(
        self,
        proposition: str,
        elements: Sequence[BaseElement],
        oracle: EvidenceOracle,
    ) -> float:
        """
        Confidence for a new belief, capped at ``max_initial_confidence``.

        Returns exactly 0.5 when there is no evidence.
        """
        if not elements:
            return NEUTRAL_CONFIDENCE

        average = await self._weighted_average(proposition, elements, oracle)
        confidence = clamp_confidence(min(average, self.parameters.max_initial_confidence))
        logger.debug(
            "Initial confidence for %s under %s: %.3f from %d elements",
            proposition, self.id, confidence, len(elements),
        )
        return confidence

    async def update_confidence(
        self,
        proposition: str,
        current_confidence: float,
        current_justification: Optional[Justification],
        new_elements: Sequence[BaseElement],
        oracle: EvidenceOracle,
    ) -> float:
        """
        Fold ``new_elements`` into ``current_confidence`` in the given order.

        Each element acts on the output of the previous one, so the oracle
        calls here are issued one element at a time.

        Parameters
        ----------
        proposition : str
            Proposition the belief is about.
        current_confidence : float
            Starting confidence; returned (clamped) when there are no new elements.
        current_justification : Justification, optional
            Evidence already held. Not consulted by the combination laws.
        new_elements : sequence of elements
            Evidence to fold in.
        oracle : EvidenceOracle
            Source of strength, saliency and trust judgments.

        Returns
        -------
        float
            Updated confidence in [0, 1].
        """
        confidence = clamp_confidence(current_confidence)
        alpha = self.parameters.source_trust_weight

        for element in new_elements:
            if element.kind in TRUST_MODULATED_KINDS:
                trust = await guarded_judgment(oracle.source_trust(element.source, self), "source_trust")
                confidence = (1 - alpha) * confidence + alpha * trust
            else:
                saliency = await guarded_judgment(oracle.evidence_saliency(element, self), "evidence_saliency")
                strength = await guarded_judgment(
                    oracle.evidence_strength(element, proposition), "evidence_strength",
                )
                confidence = (1 - saliency) * confidence + saliency * strength

        confidence = clamp_confidence(confidence)
        if new_elements:
            logger.debug(
                "Updated confidence for %s under %s: %.3f -> %.3f (%d elements)",
                proposition, self.id, current_confidence, confidence, len(new_elements),
            )
        return confidence

    async def recompute_confidence(
        self,
        proposition: str,
        justification: Justification,
        oracle: EvidenceOracle,
    ) -> float:
        """Reassess a standing belief from its evidence alone (no initial cap)."""
        if not justification.elements:
            return NEUTRAL_CONFIDENCE
        return clamp_confidence(await self._weighted_average(proposition, justification.elements, oracle))

    async def evaluate_external_justification(
        self,
        proposition: str,
        external_justification: Justification,
        source_frame: "Frame",
        oracle: EvidenceOracle,
    ) -> float:
        """
        Score another agent's justification from this frame's perspective.

        The weighted average is discounted by ``get_compatibility(source_frame)``.
        An empty justification scores 0.5 without discount.
        """
        if not external_justification.elements:
            return NEUTRAL_CONFIDENCE

        raw = await self._weighted_average(proposition, external_justification.elements, oracle)
        compatibility = self.get_compatibility(source_frame)
        score = clamp_confidence(raw * compatibility)
        logger.debug(
            "External justification for %s from frame %s scored %.3f (raw %.3f, compatibility %.2f)",
            proposition, source_frame.id, score, raw, compatibility,
        )
        return score

    # -------------------------------------------------------------------------
    # Shared averaging
    # -------------------------------------------------------------------------

    async def _score_element(
        self,
        element: BaseElement,
        proposition: str,
        oracle: EvidenceOracle,
    ) -> Tuple[float, float]:
        calls = [
            guarded_judgment(oracle.evidence_strength(element, proposition), "evidence_strength"),
            guarded_judgment(oracle.evidence_saliency(element, self), "evidence_saliency"),
        ]
        if element.kind in TRUST_MODULATED_KINDS:
            calls.append(guarded_judgment(oracle.source_trust(element.source, self), "source_trust"))

        results = await asyncio.gather(*calls)
        strength, saliency = results[0], results[1]
        if len(results) == 3:
            strength *= results[2]
        return strength, saliency

    async def _weighted_average(
        self,
        proposition: str,
        elements: Sequence[BaseElement],
        oracle: EvidenceOracle,
    ) -> float:
        scored = await asyncio.gather(
            *(self._score_element(element, proposition, oracle) for element in elements)
        )
        total_saliency = sum(saliency for _, saliency in scored)
        if total_saliency == 0:
            return NEUTRAL_CONFIDENCE
        return sum(strength * saliency for strength, saliency in scored) / total_saliency
