"""Frames: parameterised policies that turn evidence into confidence."""

from .factory import available_frame_types, create_frame
from .frame import Frame, guarded_judgment, sanitize_judgment
from .parameters import FrameParameters
from .variants import FRAME_PROFILES, FrameKind, FrameProfile

__all__ = [
    "FRAME_PROFILES",
    "Frame",
    "FrameKind",
    "FrameParameters",
    "FrameProfile",
    "available_frame_types",
    "create_frame",
    "guarded_judgment",
    "sanitize_judgment",
]
