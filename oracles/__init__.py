"""Evidence oracle implementations: LLM-backed and deterministic."""

from .llm_oracle import LLMEvidenceOracle, parse_score
from .static_oracle import StaticOracle

__all__ = ["LLMEvidenceOracle", "StaticOracle", "parse_score"]
