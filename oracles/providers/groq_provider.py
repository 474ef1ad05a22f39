"""Groq provider adapter for fast hosted inference."""

import os
from typing import Optional

from langchain_core.language_models import BaseChatModel

from epistemics.exceptions import ConfigurationError, MissingCredentialsError

from ..llm_config import ModelConfig
from .base import BaseLLMProvider


class GroqProvider(BaseLLMProvider):
    """
    Provider adapter for Groq API.

    Cheap and fast enough to run the many small judgments a belief update
    fans out. Requires the optional ``langchain-groq`` package.
    """

    def create_llm(
        self,
        config: ModelConfig,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> BaseChatModel:
        """Create a ChatGroq instance."""
        # Import here to avoid requiring groq if not used
        try:
            from langchain_groq import ChatGroq
        except ImportError as exc:
            raise ConfigurationError(
                "langchain-groq not installed. Run: pip install 'agentic-epistemology[groq]'",
                config_key="oracle_model",
                original_error=exc,
            ) from exc

        api_key = os.getenv("GROQ_API_KEY")
        if not api_key:
            raise MissingCredentialsError("GROQ_API_KEY")

        return ChatGroq(
            model=config.model_id,
            groq_api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens or config.max_tokens,
        )

    @property
    def provider_name(self) -> str:
        return "Groq"
