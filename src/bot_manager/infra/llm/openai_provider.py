"""OpenAI completion provider for bot_manager.

This module provides the OpenAI implementation of the completion
provider interface.
"""

from typing import Any, Self

import openai
from openai import AsyncOpenAI

from bot_manager.config import ExecutionSettings, LLMSettings
from bot_manager.errors import ProviderError, ProviderUnavailableError
from bot_manager.interfaces.completion import CompletionProviderInterface, CompletionRequest
from bot_manager.logging import get_logger
from bot_manager.models.chat import ChatMessage, ChatRole

__all__ = [
    "OpenAICompletionProvider",
]

logger = get_logger(__name__)


class OpenAICompletionProvider(CompletionProviderInterface):
    """OpenAI implementation of the completion provider interface.

    Performs exactly one chat completion request per call; the SDK's
    own retries are disabled so the gateway's policy is the only one.
    """

    config_class = LLMSettings

    def __init__(self, settings: LLMSettings) -> None:
        """Initialize OpenAI provider.

        Args:
            settings: LLM configuration settings

        Raises:
            ValueError: If no API key is configured
        """
        if not settings.has_api_key:
            raise ValueError("API key cannot be null or whitespace.")

        self._settings = settings
        self._model = settings.model_id
        self._client = AsyncOpenAI(
            api_key=settings.api_key.get_secret_value(),  # type: ignore[union-attr]
            base_url=settings.endpoint,
            max_retries=0,
        )
        logger.info("openai_provider_initialized", model=self._model)

    @classmethod
    async def from_config(cls, config: LLMSettings) -> Self:
        """Factory method for BotManager instantiation.

        Args:
            config: LLM settings

        Returns:
            OpenAICompletionProvider instance
        """
        return cls(config)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict.

        Args:
            config: Dictionary with LLM settings

        Returns:
            OpenAICompletionProvider instance
        """
        return cls(LLMSettings(**config))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    async def complete(
        self,
        request: CompletionRequest,
        settings: ExecutionSettings,
    ) -> list[ChatMessage]:
        """Request a chat completion from OpenAI."""
        params: dict[str, Any] = {
            "model": self._model,
            "messages": self._build_messages(request, settings),
        }
        if settings.temperature is not None:
            params["temperature"] = settings.temperature
        if settings.max_tokens is not None:
            params["max_tokens"] = settings.max_tokens
        if settings.top_p is not None:
            params["top_p"] = settings.top_p

        try:
            response = await self._client.chat.completions.create(**params)
        except openai.APITimeoutError as e:
            raise TimeoutError(str(e)) from e
        except openai.APIStatusError as e:
            raise ProviderError(e.message, status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            raise ProviderUnavailableError(str(e)) from e

        return [
            ChatMessage(role=ChatRole.ASSISTANT, content=choice.message.content or "")
            for choice in response.choices
        ]

    @staticmethod
    def _build_messages(
        request: CompletionRequest,
        settings: ExecutionSettings,
    ) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if settings.system_prompt:
            messages.append({"role": "system", "content": settings.system_prompt})
        if isinstance(request, str):
            messages.append({"role": "user", "content": request})
        else:
            messages.extend({"role": m.role.value, "content": m.content} for m in request)
        return messages
