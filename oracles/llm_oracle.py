"""
LLM Evidence Oracle
===================

Evidence judgments produced by a LangChain chat model. Each judgment is a
single ``HumanMessage`` sent through ``llm.ainvoke`` under a timeout.

Numeric replies must be a bare number in [0, 1] (``0``, ``0.73``, ``1``,
``1.0``). Anything else, and any exception or timeout, is a failed
judgment: it is logged at WARNING and replaced by ``DEFAULT_JUDGMENT``.
Interpretation falls back to the original payload and proposition
extraction to an empty list.
"""

import asyncio
import logging
import re
from typing import Any, List

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from epistemics.belief.justification import BaseElement
from epistemics.exceptions import OracleError, UnknownModelError
from epistemics.frames.frame import Frame
from epistemics.oracle import DEFAULT_JUDGMENT, EvidenceOracle

from .llm_config import MODEL_REGISTRY, get_model_config
from .prompts import (
    build_evidence_saliency_prompt,
    build_evidence_strength_prompt,
    build_extract_propositions_prompt,
    build_interpret_perception_prompt,
    build_source_trust_prompt,
)
from .providers import get_provider

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: float = 30.0

SCORE_PATTERN = re.compile(r"^(0(\.\d+)?|1(\.0+)?)$")
LIST_MARKER_PATTERN = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


# =============================================================================
# Reply parsing
# =============================================================================

def message_text(message: Any) -> str:
    """Text of a chat model reply; list content is flattened to its text parts."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return "" if content is None else str(content)


def parse_score(text: str) -> float:
    """
    Parse a bare numeric judgment.

    Raises
    ------
    OracleError
        If the reply is not a number in [0, 1] with nothing around it.
    """
    cleaned = text.strip()
    if not SCORE_PATTERN.match(cleaned):
        raise OracleError(
            "parse_score",
            message="Reply is not a bare number in [0, 1]",
            context={"reply": cleaned[:80]},
        )
    return float(cleaned)


def parse_propositions(text: str) -> List[str]:
    """One proposition per non-empty line, with list bullets and numbering removed."""
    propositions = []
    for line in text.splitlines():
        proposition = LIST_MARKER_PATTERN.sub("", line).strip()
        if proposition:
            propositions.append(proposition)
    return propositions


# =============================================================================
# Oracle
# =============================================================================

class LLMEvidenceOracle(EvidenceOracle):
    """Evidence oracle backed by a chat model."""

    def __init__(self, llm: BaseChatModel, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.llm = llm
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_model_key(
        cls,
        model_key: str,
        temperature: float = 0.0,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "LLMEvidenceOracle":
        """
        Build an oracle from a ``MODEL_REGISTRY`` key.

        Raises
        ------
        UnknownModelError
            If the key is not registered.
        ConfigurationError
            If the provider's credentials or integration package are missing.
        """
        config = get_model_config(model_key)
        if config is None:
            raise UnknownModelError(model_key, available=list(MODEL_REGISTRY))

        provider = get_provider(config.provider)
        llm = provider.create_llm(config, temperature=temperature)
        logger.info("Evidence oracle using %s via %s", config.display_name, provider.provider_name)
        return cls(llm, timeout_seconds=timeout_seconds)

    async def _ask(self, prompt: str) -> str:
        response = await asyncio.wait_for(
            self.llm.ainvoke([HumanMessage(content=prompt)]),
            timeout=self.timeout_seconds,
        )
        return message_text(response)

    async def _judge(self, operation: str, prompt: str) -> float:
        try:
            score = parse_score(await self._ask(prompt))
        except Exception as exc:
            logger.warning("%s judgment failed, using %.1f: %s", operation, DEFAULT_JUDGMENT, exc)
            return DEFAULT_JUDGMENT
        logger.debug("%s judgment: %.3f", operation, score)
        return score

    # -------------------------------------------------------------------------
    # EvidenceOracle
    # -------------------------------------------------------------------------

    async def evidence_strength(self, element: BaseElement, proposition: str) -> float:
        return await self._judge("evidence_strength", build_evidence_strength_prompt(element, proposition))

    async def evidence_saliency(self, element: BaseElement, frame: Frame) -> float:
        return await self._judge("evidence_saliency", build_evidence_saliency_prompt(element, frame))

    async def source_trust(self, source_id: str, frame: Frame) -> float:
        return await self._judge("source_trust", build_source_trust_prompt(source_id, frame))

    async def interpret_perception_data(self, payload: Any, frame: Frame) -> Any:
        try:
            text = (await self._ask(build_interpret_perception_prompt(payload, frame))).strip()
        except Exception as exc:
            logger.warning("Perception interpretation failed under %s, keeping payload: %s", frame.id, exc)
            return payload
        if not text:
            logger.warning("Empty perception interpretation under %s, keeping payload", frame.id)
            return payload
        return text

    async def extract_relevant_propositions(self, payload: Any, frame: Frame) -> List[str]:
        try:
            text = await self._ask(build_extract_propositions_prompt(payload, frame))
        except Exception as exc:
            logger.warning("Proposition extraction failed under %s: %s", frame.id, exc)
            return []
        propositions = parse_propositions(text)
        logger.debug("Extracted %d propositions under %s", len(propositions), frame.id)
        return propositions
