"""
Frame Variants
==============

Every frame runs the same evaluation algorithm. Variants differ only in
their parameter overrides and in one row of the compatibility table, so
each variant is a constant ``FrameProfile`` keyed by ``FrameKind``.

General-purpose variants:  efficiency, thoroughness, security
Negotiation variants:      persuasive, buyer
Debate variants:           moderator, pro_debate, con_debate, judge

Compatibility is defined per direction: ``FRAME_PROFILES[a].compatibility[b]``
is how much a frame of kind ``a`` credits justifications produced under
kind ``b``. Kinds missing from a row get that row's ``default_compatibility``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class FrameKind(str, Enum):
    """Variant tag of a frame."""
    EFFICIENCY = "efficiency"
    THOROUGHNESS = "thoroughness"
    SECURITY = "security"
    PERSUASIVE = "persuasive"
    BUYER = "buyer"
    MODERATOR = "moderator"
    PRO_DEBATE = "pro_debate"
    CON_DEBATE = "con_debate"
    JUDGE = "judge"


@dataclass(frozen=True)
class FrameProfile:
    """Constant table entry for one frame variant."""
    name: str
    description: str
    parameter_overrides: Dict[str, Any]
    compatibility: Dict[FrameKind, float]
    default_compatibility: float


# Debaters trust argument over raw data
_DEBATER_OVERRIDES: Dict[str, Any] = {
    "testimony_weight": 0.85,
    "inference_weight": 0.85,
    "observation_weight": 0.4,
    "tool_result_weight": 0.4,
    "max_initial_confidence": 0.9,
}


FRAME_PROFILES: Dict[FrameKind, FrameProfile] = {
    # -------------------------------------------------------------------------
    # General purpose
    # -------------------------------------------------------------------------
    FrameKind.EFFICIENCY: FrameProfile(
        name="Efficiency",
        description="Prioritizes speed, resource optimization, and quick results",
        parameter_overrides={
            "tool_result_weight": 0.9,
            "observation_weight": 0.8,
            "testimony_weight": 0.4,
            "inference_weight": 0.7,
            "confidence_increase_rate": 0.15,
            "confidence_decrease_rate": 0.1,
            "min_sample_size_for_high_confidence": 3,
            "max_initial_confidence": 0.85,
        },
        compatibility={
            FrameKind.EFFICIENCY: 0.9,
            FrameKind.THOROUGHNESS: 0.3,
            FrameKind.SECURITY: 0.5,
        },
        default_compatibility=0.4,
    ),
    FrameKind.THOROUGHNESS: FrameProfile(
        name="Thoroughness",
        description="Prioritizes completeness, detail, and comprehensive analysis",
        parameter_overrides={
            "tool_result_weight": 0.7,
            "observation_weight": 0.8,
            "testimony_weight": 0.6,
            "inference_weight": 0.8,
            "confidence_increase_rate": 0.08,
            "confidence_decrease_rate": 0.12,
            "min_sample_size_for_high_confidence": 8,
            "max_initial_confidence": 0.7,
        },
        compatibility={
            FrameKind.THOROUGHNESS: 0.9,
            FrameKind.EFFICIENCY: 0.3,
            FrameKind.SECURITY: 0.7,
        },
        default_compatibility=0.5,
    ),
    FrameKind.SECURITY: FrameProfile(
        name="Security",
        description="Prioritizes safety, security, and risk minimization",
        parameter_overrides={
            "tool_result_weight": 0.8,
            "observation_weight": 0.9,
            "testimony_weight": 0.4,
            "inference_weight": 0.7,
            "confidence_increase_rate": 0.05,
            "confidence_decrease_rate": 0.2,
            "min_sample_size_for_high_confidence": 10,
            "max_initial_confidence": 0.6,
        },
        compatibility={
            FrameKind.SECURITY: 0.9,
            FrameKind.THOROUGHNESS: 0.7,
            FrameKind.EFFICIENCY: 0.5,
        },
        default_compatibility=0.4,
    ),
    # -------------------------------------------------------------------------
    # Negotiation
    # -------------------------------------------------------------------------
    FrameKind.PERSUASIVE: FrameProfile(
        name="Persuasion Architect",
        description=(
            "An elite negotiator focused on outcome maximization while preserving "
            "reputational capital and ethical integrity"
        ),
        parameter_overrides={
            "testimony_weight": 0.85,
            "external_weight": 0.6,
            "inference_weight": 0.75,
            "max_initial_confidence": 0.9,
            "source_trust_weight": 0.7,
        },
        compatibility={
            FrameKind.PERSUASIVE: 0.95,
            FrameKind.BUYER: 0.7,
        },
        default_compatibility=0.6,
    ),
    FrameKind.BUYER: FrameProfile(
        name="Realistic Buyer",
        description="A stakeholder with both rational and emotional decision factors",
        parameter_overrides={
            "tool_result_weight": 0.8,
            "observation_weight": 0.85,
            "testimony_weight": 0.7,
            "external_weight": 0.3,
            "max_initial_confidence": 0.75,
            "source_trust_weight": 0.5,
        },
        compatibility={
            FrameKind.BUYER: 0.95,
            FrameKind.PERSUASIVE: 0.6,
        },
        default_compatibility=0.5,
    ),
    # -------------------------------------------------------------------------
    # Debate
    # -------------------------------------------------------------------------
    FrameKind.MODERATOR: FrameProfile(
        name="Moderator",
        description="Prioritizes fairness, balance, and maintains neutral perspective",
        parameter_overrides={
            "tool_result_weight": 0.7,
            "observation_weight": 0.7,
            "testimony_weight": 0.7,
            "inference_weight": 0.7,
            "external_weight": 0.7,
        },
        compatibility={
            FrameKind.MODERATOR: 0.95,
            FrameKind.PRO_DEBATE: 0.6,
            FrameKind.CON_DEBATE: 0.6,
            FrameKind.JUDGE: 0.8,
        },
        default_compatibility=0.7,
    ),
    FrameKind.PRO_DEBATE: FrameProfile(
        name="Pro Debater",
        description="Prioritizes supporting evidence and persuasive arguments",
        parameter_overrides=_DEBATER_OVERRIDES,
        compatibility={
            FrameKind.PRO_DEBATE: 0.95,
            FrameKind.CON_DEBATE: 0.3,
            FrameKind.MODERATOR: 0.6,
            FrameKind.JUDGE: 0.5,
        },
        default_compatibility=0.4,
    ),
    FrameKind.CON_DEBATE: FrameProfile(
        name="Con Debater",
        description="Prioritizes opposing evidence and critical analysis",
        parameter_overrides=_DEBATER_OVERRIDES,
        compatibility={
            FrameKind.CON_DEBATE: 0.95,
            FrameKind.PRO_DEBATE: 0.3,
            FrameKind.MODERATOR: 0.6,
            FrameKind.JUDGE: 0.5,
        },
        default_compatibility=0.4,
    ),
    FrameKind.JUDGE: FrameProfile(
        name="Judge",
        description="Prioritizes logical analysis, evidence quality, and argumentative structure",
        parameter_overrides={
            "tool_result_weight": 0.6,
            "observation_weight": 0.6,
            "inference_weight": 0.7,
            "testimony_weight": 0.5,
        },
        compatibility={
            FrameKind.JUDGE: 0.95,
            FrameKind.MODERATOR: 0.8,
            FrameKind.PRO_DEBATE: 0.5,
            FrameKind.CON_DEBATE: 0.5,
        },
        default_compatibility=0.6,
    ),
}


def get_profile(kind: FrameKind) -> FrameProfile:
    return FRAME_PROFILES[FrameKind(kind)]
