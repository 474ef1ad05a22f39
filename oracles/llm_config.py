"""
LLM Configuration and Model Registry

Defines the chat models an LLM-backed evidence oracle can run on. Oracle
prompts are short and replies are a single number or a short list, so
output budgets are small. Tiers trade judgment quality against cost:
- Local: Ollama models ($0)
- API: Groq (~$0.05-0.08/M tokens)
- Premium: Claude (~$1-15/M tokens)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class ModelTier(str, Enum):
    """Model tier classification."""
    LOCAL = "local"      # Local Ollama models (free)
    API = "api"          # Fast hosted open models (Groq)
    PREMIUM = "premium"  # Claude


class ModelProvider(str, Enum):
    """Supported model providers."""
    OLLAMA = "ollama"
    GROQ = "groq"
    ANTHROPIC = "anthropic"


@dataclass
class ModelConfig:
    """Configuration for a specific model."""
    model_id: str
    provider: ModelProvider
    tier: ModelTier
    display_name: str
    max_tokens: int = 256
    context_window: int = 8192


DEFAULT_ORACLE_MODEL = "claude-haiku"


# =============================================================================
# Model Registry
# =============================================================================

MODEL_REGISTRY: Dict[str, ModelConfig] = {
    # -------------------------------------------------------------------------
    # Local Models (Ollama) - $0 cost
    # -------------------------------------------------------------------------
    "llama-3.2-3b": ModelConfig(
        model_id="llama3.2:3b",
        provider=ModelProvider.OLLAMA,
        tier=ModelTier.LOCAL,
        display_name="Llama 3.2 3B",
        context_window=8192,
    ),
    "phi-4": ModelConfig(
        model_id="phi4:latest",
        provider=ModelProvider.OLLAMA,
        tier=ModelTier.LOCAL,
        display_name="Phi-4 14B",
        context_window=16384,
    ),

    # -------------------------------------------------------------------------
    # API Models - Low cost
    # -------------------------------------------------------------------------
    "groq-llama-70b": ModelConfig(
        model_id="llama-3.3-70b-versatile",
        provider=ModelProvider.GROQ,
        tier=ModelTier.API,
        display_name="Groq Llama 3.3 70B",
        context_window=128000,
    ),

    # -------------------------------------------------------------------------
    # Premium Models (Anthropic)
    # -------------------------------------------------------------------------
    "claude-haiku": ModelConfig(
        model_id="claude-3-5-haiku-latest",
        provider=ModelProvider.ANTHROPIC,
        tier=ModelTier.PREMIUM,
        display_name="Claude Haiku 3.5",
        context_window=200000,
    ),
    "claude-sonnet": ModelConfig(
        model_id="claude-sonnet-4-20250514",
        provider=ModelProvider.ANTHROPIC,
        tier=ModelTier.PREMIUM,
        display_name="Claude Sonnet 4",
        max_tokens=512,
        context_window=200000,
    ),
}


# =============================================================================
# Helper Functions
# =============================================================================

def get_model_config(model_key: str) -> Optional[ModelConfig]:
    """Get configuration for a specific model by key."""
    return MODEL_REGISTRY.get(model_key)

