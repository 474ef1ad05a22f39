"""
LLM Provider Adapters

Each adapter creates a LangChain chat model for one provider, so the
evidence oracle can run on Anthropic, Groq or a local Ollama model.

Usage:
    from oracles.providers import get_provider
    from oracles.llm_config import ModelProvider

    provider = get_provider(ModelProvider.GROQ)
    llm = provider.create_llm(model_config, temperature=0.0)
"""

from typing import Dict

from epistemics.exceptions import ConfigurationError

from .base import BaseLLMProvider
from .anthropic_provider import AnthropicProvider
from .groq_provider import GroqProvider
from .ollama_provider import OllamaProvider

from ..llm_config import ModelProvider

__all__ = [
    "BaseLLMProvider",
    "AnthropicProvider",
    "GroqProvider",
    "OllamaProvider",
    "get_provider",
    "PROVIDER_MAP",
]

PROVIDER_MAP: Dict[ModelProvider, BaseLLMProvider] = {
    ModelProvider.ANTHROPIC: AnthropicProvider(),
    ModelProvider.GROQ: GroqProvider(),
    ModelProvider.OLLAMA: OllamaProvider(),
}


def get_provider(provider: ModelProvider) -> BaseLLMProvider:
    """
    Get the provider adapter for a given provider type.

    Args:
        provider: The ModelProvider enum value (or its string value)

    Returns:
        BaseLLMProvider instance for the provider

    Raises:
        ConfigurationError: If provider is not supported
    """
    try:
        return PROVIDER_MAP[ModelProvider(provider)]
    except (KeyError, ValueError) as exc:
        raise ConfigurationError(
            f"Provider {provider} not supported",
            config_key="provider",
            context={"available": [p.value for p in PROVIDER_MAP]},
            original_error=exc,
        ) from exc
