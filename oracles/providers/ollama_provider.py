"""Ollama provider adapter for local model inference."""

import os
from typing import Optional

from langchain_core.language_models import BaseChatModel

from epistemics.exceptions import ConfigurationError

from ..llm_config import ModelConfig
from .base import BaseLLMProvider


class OllamaProvider(BaseLLMProvider):
    """
    Provider adapter for Ollama local models.

    Zero API cost, but small local models follow the bare-number reply
    format less reliably; expect more judgments to fall back to 0.5.
    Requires the optional ``langchain-ollama`` package.
    """

    def __init__(self):
        self.base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    def create_llm(
        self,
        config: ModelConfig,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> BaseChatModel:
        """Create a ChatOllama instance."""
        # Import here to avoid requiring ollama if not used
        try:
            from langchain_ollama import ChatOllama
        except ImportError as exc:
            raise ConfigurationError(
                "langchain-ollama not installed. Run: pip install 'agentic-epistemology[ollama]'",
                config_key="oracle_model",
                original_error=exc,
            ) from exc

        return ChatOllama(
            model=config.model_id,
            base_url=self.base_url,
            temperature=temperature,
            num_predict=max_tokens or config.max_tokens,
        )

    @property
    def provider_name(self) -> str:
        return "Ollama"
