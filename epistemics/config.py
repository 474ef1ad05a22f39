"""
Engine Settings
===============

Settings come from the environment (optionally a ``.env`` file):

    EPISTEMICS_CONFLICT_THRESHOLD   -- min confidence for a contradiction to count (default: 0.6)
    EPISTEMICS_ACTION_THRESHOLD     -- min confidence to act on a belief (default: 0.7)
    EPISTEMICS_COMMUNICATION_THRESHOLD -- min confidence to share a belief (default: 0.5)
    EPISTEMICS_MEMORY_THRESHOLD     -- min confidence to keep a belief in long-term memory (default: 0.3)
    EPISTEMICS_REVISION_THRESHOLD   -- min |delta| for a resolution to count as a revision (default: 0.1)
    EPISTEMICS_RESOLUTION_JITTER    -- jitter amplitude of volume-based resolution, 0 disables (default: 0.05)
    EPISTEMICS_RESOLUTION_SEED      -- seed for resolution jitter (default: unseeded)
    EPISTEMICS_ORACLE_MODEL         -- MODEL_REGISTRY key of the LLM oracle (default: claude-haiku)
    EPISTEMICS_ORACLE_TEMPERATURE   -- oracle sampling temperature (default: 0.0)
    EPISTEMICS_ORACLE_TIMEOUT       -- seconds per oracle call (default: 30)
    LOG_LEVEL                       -- logging verbosity (default: INFO)

Malformed or out-of-range values are logged and replaced by their defaults.
"""

import logging
import os
import random
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .conflict.detector import ConfidenceThresholds
from .conflict.resolution import JustificationExchangeStrategy

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ModelT = TypeVar("ModelT", bound=BaseModel)


class EngineSettings(BaseModel):
    """Runtime settings of the belief-revision engine."""
    model_config = ConfigDict(frozen=True)

    thresholds: ConfidenceThresholds = Field(default_factory=ConfidenceThresholds)
    revision_threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    resolution_jitter: float = Field(default=0.05, ge=0.0, le=1.0)
    resolution_seed: Optional[int] = None
    oracle_model: str = "claude-haiku"
    oracle_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    oracle_timeout_seconds: float = Field(default=30.0, gt=0.0)
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: Any) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level


# =============================================================================
# Environment loading
# =============================================================================

def _env_value(name: str, cast: Callable[[str], Any]) -> Any:
    """Read and cast one variable; None when unset, blank or malformed."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using default", name, raw)
        return None


def _validated(model: Type[ModelT], values: Dict[str, Any]) -> ModelT:
    """Build ``model``, dropping fields that fail validation so they take defaults."""
    values = {key: value for key, value in values.items() if value is not None}
    try:
        return model(**values)
    except PydanticValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
        logger.warning("Invalid settings %s, using defaults", sorted(invalid))
        return model(**{key: value for key, value in values.items() if key not in invalid})


def load_settings(env_file: Optional[str] = None) -> EngineSettings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional path to a ``.env`` file; existing environment
            variables take precedence over its contents.

    Returns:
        EngineSettings
    """
    load_dotenv(env_file)

    thresholds = _validated(ConfidenceThresholds, {
        "conflict": _env_value("EPISTEMICS_CONFLICT_THRESHOLD", float),
        "action": _env_value("EPISTEMICS_ACTION_THRESHOLD", float),
        "communication": _env_value("EPISTEMICS_COMMUNICATION_THRESHOLD", float),
        "memory": _env_value("EPISTEMICS_MEMORY_THRESHOLD", float),
    })

    settings = _validated(EngineSettings, {
        "thresholds": thresholds,
        "revision_threshold": _env_value("EPISTEMICS_REVISION_THRESHOLD", float),
        "resolution_jitter": _env_value("EPISTEMICS_RESOLUTION_JITTER", float),
        "resolution_seed": _env_value("EPISTEMICS_RESOLUTION_SEED", int),
        "oracle_model": _env_value("EPISTEMICS_ORACLE_MODEL", str),
        "oracle_temperature": _env_value("EPISTEMICS_ORACLE_TEMPERATURE", float),
        "oracle_timeout_seconds": _env_value("EPISTEMICS_ORACLE_TIMEOUT", float),
        "log_level": _env_value("LOG_LEVEL", str),
    })
    logger.debug("Loaded settings: %s", settings.model_dump())
    return settings


def build_exchange_strategy(settings: EngineSettings) -> JustificationExchangeStrategy:
    """Volume-based resolution strategy configured (and seeded) from settings."""
    return JustificationExchangeStrategy(
        confidence_revision_threshold=settings.revision_threshold,
        jitter=settings.resolution_jitter,
        rng=random.Random(settings.resolution_seed),
    )
