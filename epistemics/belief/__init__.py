"""
Belief data model: propositions, justifications and beliefs.

``BeliefStore`` lives in ``epistemics.belief.store`` and is not re-exported
here because it depends on frames and conflicts, which depend on this package.
"""

from .belief import Belief
from .justification import (
    BaseElement,
    ElementKind,
    ExternalElement,
    InferenceElement,
    Justification,
    JustificationElement,
    ObservationElement,
    TestimonyElement,
    ToolResultElement,
)
from .propositions import are_contradictory, clamp_confidence, is_negated, negate_prop

__all__ = [
    "BaseElement",
    "Belief",
    "ElementKind",
    "ExternalElement",
    "InferenceElement",
    "Justification",
    "JustificationElement",
    "ObservationElement",
    "TestimonyElement",
    "ToolResultElement",
    "are_contradictory",
    "clamp_confidence",
    "is_negated",
    "negate_prop",
]
