"""Construct frames by variant name."""

import logging
from typing import Any, List, Mapping, Optional, Union

from ..exceptions import UnknownFrameError
from .frame import Frame
from .variants import FrameKind

logger = logging.getLogger(__name__)


def available_frame_types() -> List[str]:
    return [kind.value for kind in FrameKind]


def create_frame(
    name: Union[str, FrameKind],
    overrides: Optional[Mapping[str, Any]] = None,
    frame_id: Optional[str] = None,
) -> Frame:
    """
    Create a frame of the named variant.

    Parameters
    ----------
    name : str or FrameKind
        Variant name, case-insensitive (e.g. ``"efficiency"``, ``"Buyer"``).
    overrides : mapping, optional
        Parameter overrides applied on top of the variant's defaults.
    frame_id : str, optional
        Frame id; defaults to the variant name.

    Raises
    ------
    UnknownFrameError
        If ``name`` is not a known variant.
    InvalidFrameParameterError
        If ``overrides`` names unknown parameters or has invalid values.
    """
    key = name.value if isinstance(name, FrameKind) else str(name).strip().lower()
    try:
        kind = FrameKind(key)
    except ValueError as exc:
        raise UnknownFrameError(str(name), available=available_frame_types(), original_error=exc) from exc

    data: dict = {"kind": kind, "parameters": dict(overrides or {})}
    if frame_id:
        data["id"] = frame_id

    frame = Frame(**data)
    logger.debug("Created frame %s (%s)", frame.id, kind.value)
    return frame
