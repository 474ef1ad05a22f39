"""Anthropic Claude provider adapter."""

import os
from typing import Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel

from epistemics.exceptions import MissingCredentialsError

from ..llm_config import ModelConfig
from .base import BaseLLMProvider


class AnthropicProvider(BaseLLMProvider):
    """Provider adapter for Anthropic Claude models, the default oracle backend."""

    def create_llm(
        self,
        config: ModelConfig,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> BaseChatModel:
        """Create a ChatAnthropic instance."""
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise MissingCredentialsError("ANTHROPIC_API_KEY")

        return ChatAnthropic(
            model=config.model_id,
            anthropic_api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens or config.max_tokens,
        )

    @property
    def provider_name(self) -> str:
        return "Anthropic"
