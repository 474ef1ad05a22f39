"""
Proposition and confidence helpers.

Propositions are opaque strings. The only structure the engine recognises is
a single leading negation marker: ``negate_prop("P") == "¬P"`` and
``negate_prop("¬P") == "P"``.
"""

import math
import uuid
from datetime import datetime, timezone

NEGATION_MARKER: str = "¬"

MIN_CONFIDENCE: float = 0.0
MAX_CONFIDENCE: float = 1.0
NEUTRAL_CONFIDENCE: float = 0.5


def negate_prop(proposition: str) -> str:
    """Toggle the leading negation marker of a proposition."""
    if proposition.startswith(NEGATION_MARKER):
        return proposition[len(NEGATION_MARKER):]
    return f"{NEGATION_MARKER}{proposition}"


def is_negated(proposition: str) -> bool:
    """True if the proposition is in its negated form."""
    return proposition.startswith(NEGATION_MARKER)


def are_contradictory(first: str, second: str) -> bool:
    """True iff one proposition is the negation-marker form of the other."""
    return first == negate_prop(second) or second == negate_prop(first)


def clamp(value: float, low: float = MIN_CONFIDENCE, high: float = MAX_CONFIDENCE) -> float:
    """Clamp a value between low and high (inclusive)."""
    return max(low, min(high, value))


def clamp_confidence(value: float) -> float:
    """
    Clamp a confidence value to [0, 1].

    NaN has no meaningful position on the scale and maps to the neutral
    value, so callers always receive a usable number.
    """
    try:
        value = float(value)
    except OverflowError:
        # Integers beyond float range still have a sign
        return MAX_CONFIDENCE if value > 0 else MIN_CONFIDENCE
    if math.isnan(value):
        return NEUTRAL_CONFIDENCE
    return clamp(value, MIN_CONFIDENCE, MAX_CONFIDENCE)


def generate_id(prefix: str = "id") -> str:
    """Generate a unique ID with the given prefix, e.g. ``belief_1f3a9c0b2d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
