"""Base class for LLM provider adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from langchain_core.language_models import BaseChatModel

from ..llm_config import ModelConfig


class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM provider adapters.

    Each provider (Anthropic, Groq, Ollama) implements this interface so the
    evidence oracle can be built the same way on any of them.
    """

    @abstractmethod
    def create_llm(
        self,
        config: ModelConfig,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> BaseChatModel:
        """
        Create a LangChain chat model.

        Args:
            config: Model configuration from MODEL_REGISTRY
            temperature: Sampling temperature; judgments want 0.0
            max_tokens: Maximum output tokens (uses config default if None)

        Returns:
            BaseChatModel instance

        Raises:
            ConfigurationError: If credentials or the integration package are missing
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Human-readable provider name for logging."""
