"""
Evidence Oracle Contract
========================

Frames never score evidence themselves. Every numeric judgment comes from
an injected ``EvidenceOracle``:

  - ``evidence_strength``  -- 1.0 supports the proposition, 0.0 contradicts
                              it, 0.5 is neutral or irrelevant
  - ``evidence_saliency``  -- how much attention the frame pays to the element
  - ``source_trust``       -- how far the frame trusts an evidence origin

plus two non-numeric services (perception interpretation and proposition
extraction). Implementations are expected to return ``DEFAULT_JUDGMENT`` on
failure; frames additionally sanitise whatever comes back, so a broken
oracle degrades to neutral influence instead of aborting an update.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from .belief.justification import BaseElement
    from .frames.frame import Frame

DEFAULT_JUDGMENT: float = 0.5


class EvidenceOracle(ABC):
    """Provider of frame-conditioned evidence judgments."""

    @abstractmethod
    async def evidence_strength(self, element: "BaseElement", proposition: str) -> float:
        """How strongly ``element`` supports ``proposition``, in [0, 1]."""

    @abstractmethod
    async def evidence_saliency(self, element: "BaseElement", frame: "Frame") -> float:
        """Attention weight of ``element`` under ``frame``, in [0, 1]."""

    @abstractmethod
    async def source_trust(self, source_id: str, frame: "Frame") -> float:
        """Trustworthiness of ``source_id`` under ``frame``, in [0, 1]."""

    @abstractmethod
    async def interpret_perception_data(self, payload: Any, frame: "Frame") -> Any:
        """Frame-conditioned reinterpretation of a perception payload."""

    @abstractmethod
    async def extract_relevant_propositions(self, payload: Any, frame: "Frame") -> List[str]:
        """Propositions in ``payload`` that matter under ``frame``."""
