"""Conflict detection and resolution between contradictory beliefs."""

from .detector import ConfidenceThresholds, DEFAULT_THRESHOLDS, detect_conflicts, detect_internal_conflicts
from .models import (
    ConflictResolution,
    ConflictResolutionResult,
    ConflictStatus,
    EpistemicConflict,
    ResolutionType,
)
from .resolution import (
    ConflictResolutionStrategy,
    FrameAwareExchangeStrategy,
    JustificationExchangeStrategy,
)

__all__ = [
    "ConfidenceThresholds",
    "ConflictResolution",
    "ConflictResolutionResult",
    "ConflictResolutionStrategy",
    "ConflictStatus",
    "DEFAULT_THRESHOLDS",
    "EpistemicConflict",
    "FrameAwareExchangeStrategy",
    "JustificationExchangeStrategy",
    "ResolutionType",
    "detect_conflicts",
    "detect_internal_conflicts",
]
