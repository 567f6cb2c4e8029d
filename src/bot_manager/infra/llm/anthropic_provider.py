"""Anthropic completion provider for bot_manager.

This module provides the Anthropic implementation of the completion
provider interface. System messages from a conversation history are
folded into Anthropic's separate ``system`` parameter.
"""

from typing import Any, Self

import anthropic
from anthropic import AsyncAnthropic

from bot_manager.config import ExecutionSettings, LLMSettings
from bot_manager.errors import ProviderError, ProviderUnavailableError
from bot_manager.interfaces.completion import CompletionProviderInterface, CompletionRequest
from bot_manager.logging import get_logger
from bot_manager.models.chat import ChatMessage, ChatRole

__all__ = [
    "AnthropicCompletionProvider",
]

logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 1024


class AnthropicCompletionProvider(CompletionProviderInterface):
    """Anthropic implementation of the completion provider interface."""

    config_class = LLMSettings

    def __init__(self, settings: LLMSettings) -> None:
        """Initialize Anthropic provider.

        Args:
            settings: LLM configuration settings

        Raises:
            ValueError: If no API key is configured
        """
        if not settings.has_api_key:
            raise ValueError("API key cannot be null or whitespace.")

        self._settings = settings
        self._model = settings.model_id
        self._client = AsyncAnthropic(
            api_key=settings.api_key.get_secret_value(),  # type: ignore[union-attr]
            base_url=settings.endpoint,
            max_retries=0,
        )
        logger.info("anthropic_provider_initialized", model=self._model)

    @classmethod
    async def from_config(cls, config: LLMSettings) -> Self:
        """Factory method for BotManager instantiation."""
        return cls(config)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict."""
        return cls(LLMSettings(**config))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    async def complete(
        self,
        request: CompletionRequest,
        settings: ExecutionSettings,
    ) -> list[ChatMessage]:
        """Request a chat completion from Anthropic."""
        system_parts, messages = self._split_messages(request)
        if settings.system_prompt:
            system_parts.insert(0, settings.system_prompt)

        params: dict[str, Any] = {
            "model": self._model,
            "max_tokens": settings.max_tokens or DEFAULT_MAX_TOKENS,
            "messages": messages,
        }
        if system_parts:
            params["system"] = "\n\n".join(system_parts)
        if settings.temperature is not None:
            params["temperature"] = settings.temperature
        if settings.top_p is not None:
            params["top_p"] = settings.top_p

        try:
            response = await self._client.messages.create(**params)
        except anthropic.APITimeoutError as e:
            raise TimeoutError(str(e)) from e
        except anthropic.APIStatusError as e:
            raise ProviderError(e.message, status_code=e.status_code) from e
        except anthropic.APIConnectionError as e:
            raise ProviderUnavailableError(str(e)) from e

        if not response.content:
            return []
        text = "".join(block.text for block in response.content if block.type == "text")
        return [ChatMessage(role=ChatRole.ASSISTANT, content=text)]

    @staticmethod
    def _split_messages(
        request: CompletionRequest,
    ) -> tuple[list[str], list[dict[str, str]]]:
        if isinstance(request, str):
            return [], [{"role": "user", "content": request}]

        system_parts: list[str] = []
        messages: list[dict[str, str]] = []
        for message in request:
            if message.role == ChatRole.SYSTEM:
                system_parts.append(message.content)
            else:
                messages.append({"role": message.role.value, "content": message.content})
        return system_parts, messages
