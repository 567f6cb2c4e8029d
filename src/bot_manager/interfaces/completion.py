"""Completion provider interface for bot_manager.

This module defines the Protocol for the external chat completion
capability wrapped by the completion gateway.
"""

from collections.abc import Sequence
from typing import ClassVar, Protocol, runtime_checkable

from bot_manager.config import ExecutionSettings
from bot_manager.models.chat import ChatMessage

__all__ = [
    "CompletionProviderInterface",
    "CompletionRequest",
]

CompletionRequest = str | Sequence[ChatMessage]


@runtime_checkable
class CompletionProviderInterface(Protocol):
    """Contract for a single chat completion request.

    Implementations perform exactly one request per call and never
    retry on their own. Failures are reported as:

    - ``ProviderError`` carrying the HTTP-like status code, if any
    - ``ProviderUnavailableError`` when the service cannot be reached
    - ``TimeoutError`` when the provider gives up waiting
    """

    config_class: ClassVar[type | None] = None

    async def complete(
        self,
        request: CompletionRequest,
        settings: ExecutionSettings,
    ) -> list[ChatMessage]:
        """Request a chat completion.

        Args:
            request: A single prompt, or an ordered conversation history
            settings: Generation settings for this request

        Returns:
            Returned messages; may be empty
        """
        ...
