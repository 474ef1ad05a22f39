"""
Frame parameters.

A flat record of the numeric knobs a frame applies to evidence. Every frame
variant starts from these defaults and overrides a subset.
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..belief.justification import ElementKind
from ..exceptions import InvalidFrameParameterError

logger = logging.getLogger(__name__)


class FrameParameters(BaseModel):
    """Evidence weights and revision rates of a frame."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    tool_result_weight: float = Field(default=0.8, ge=0.0, le=1.0)
    observation_weight: float = Field(default=0.7, ge=0.0, le=1.0)
    testimony_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    inference_weight: float = Field(default=0.6, ge=0.0, le=1.0)
    external_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    confidence_increase_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    confidence_decrease_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    min_sample_size_for_high_confidence: int = Field(default=5, ge=1)
    max_initial_confidence: float = Field(default=0.8, ge=0.0, le=1.0)
    frame_compatibility_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    source_trust_weight: float = Field(
        default=0.6, ge=0.0, le=1.0,
        description="Alpha of the justification-source update: pull toward source trust",
    )

    def weight_for(self, kind: ElementKind) -> float:
        """Per-kind evidence weight."""
        return getattr(self, f"{ElementKind(kind).value}_weight")

    def merged(self, overrides: Mapping[str, Any]) -> "FrameParameters":
        """
        Shallow-merge ``overrides`` into a new parameter set.

        Raises
        ------
        InvalidFrameParameterError
            If an override names an unknown parameter or has an invalid value.
        """
        unknown = sorted(set(overrides) - set(type(self).model_fields))
        if unknown:
            raise InvalidFrameParameterError(unknown, message="Unknown frame parameters")

        try:
            return type(self).model_validate({**self.model_dump(), **dict(overrides)})
        except PydanticValidationError as exc:
            names = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            logger.debug("Rejected frame parameter overrides %s: %s", names, exc)
            raise InvalidFrameParameterError(names, message="Invalid frame parameter values", original_error=exc) from exc


