"""Chat completion gateway for bot_manager.

This module wraps a completion provider with input validation,
exponential-backoff retries and error translation.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from bot_manager.config import ExecutionSettings, LLMSettings
from bot_manager.errors import (
    CompletionError,
    RateLimitedError,
    UnexpectedCompletionError,
    translate_provider_error,
)
from bot_manager.interfaces.completion import CompletionProviderInterface, CompletionRequest
from bot_manager.logging import get_logger
from bot_manager.models.chat import ChatMessage
from bot_manager.services.prompt_validation import validate_history, validate_prompt

__all__ = [
    "ChatCompletionGateway",
]

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class ChatCompletionGateway:
    """Resilient front for a chat completion provider.

    Every call is validated first and fails fast with
    ``InvalidInputError`` before the provider is touched. The provider
    call then runs under a retry policy: failures are translated into
    the completion error taxonomy, and only retryable kinds
    (``ServiceUnavailableError``, ``CompletionTimeoutError``) are
    attempted again, waiting ``backoff_base ** attempt`` seconds before
    each retry.

    Caller cancellation is never retried: ``asyncio.CancelledError``
    propagates from the in-flight request or from a pending backoff
    sleep unchanged. A per-request ``timeout`` expiring inside the
    provider call is reported as ``CompletionTimeoutError``.

    Example:
        gateway = ChatCompletionGateway(provider, settings)
        answer = await gateway.complete_from_prompt("Summarize this text")
    """

    def __init__(
        self,
        provider: CompletionProviderInterface,
        settings: LLMSettings | None = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize gateway with a provider.

        Args:
            provider: Completion provider performing single requests
            settings: LLM settings (retry policy, timeout, execution settings)
            sleep: Coroutine used for backoff delays
        """
        settings = settings or LLMSettings()
        self._provider = provider
        self._execution_settings: ExecutionSettings = settings.execution
        self._max_retries = settings.max_retries
        self._backoff_base = settings.retry_backoff_base
        self._default_timeout = settings.request_timeout
        self._sleep = sleep

    async def complete_from_prompt(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
    ) -> str:
        """Get a completion for a single prompt.

        Args:
            prompt: Prompt text
            timeout: Per-attempt deadline in seconds (defaults to settings)

        Returns:
            Text of the first returned message, or "" if none

        Raises:
            InvalidInputError: If the prompt fails validation
            CompletionError: If the provider call ultimately fails
        """
        validate_prompt(prompt)
        return await self._execute(
            prompt,
            f"prompt with length {len(prompt)}",
            timeout,
        )

    async def complete_from_history(
        self,
        history: Sequence[ChatMessage] | None,
        *,
        timeout: float | None = None,
    ) -> str:
        """Get a completion for a conversation history.

        Args:
            history: Ordered chat messages
            timeout: Per-attempt deadline in seconds (defaults to settings)

        Returns:
            Text of the first returned message, or "" if none

        Raises:
            InvalidInputError: If the history fails validation
            CompletionError: If the provider call ultimately fails
        """
        validate_history(history)
        messages = list(history or [])
        return await self._execute(
            messages,
            f"chat history with {len(messages)} messages",
            timeout,
        )

    def _backoff_delay(self, attempt: int) -> float:
        """Delay in seconds before retry number ``attempt`` (1-based)."""
        return float(self._backoff_base**attempt)

    async def _invoke(self, request: CompletionRequest, timeout: float | None) -> list[ChatMessage]:
        deadline = timeout if timeout is not None else self._default_timeout
        async with asyncio.timeout(deadline):
            return await self._provider.complete(request, self._execution_settings)

    async def _execute(
        self,
        request: CompletionRequest,
        description: str,
        timeout: float | None,
    ) -> str:
        logger.debug("completion_request_sending", request=description)

        attempt = 0
        while True:
            try:
                messages = await self._invoke(request, timeout)
            except Exception as e:
                error = translate_provider_error(e)
                if error.retryable and attempt < self._max_retries:
                    attempt += 1
                    delay = self._backoff_delay(attempt)
                    logger.warning(
                        "completion_retry",
                        request=description,
                        retry_count=attempt,
                        max_retries=self._max_retries,
                        delay_seconds=delay,
                        error_kind=type(error).__name__,
                        error=str(e),
                    )
                    await self._sleep(delay)
                    continue
                self._log_failure(error, e, description, attempt)
                if error is e:
                    raise
                raise error from e

            content = messages[0].content if messages else ""
            logger.debug(
                "completion_response_received",
                request=description,
                length=len(content),
                attempts=attempt + 1,
            )
            return content

    @staticmethod
    def _log_failure(
        error: CompletionError,
        cause: Exception,
        description: str,
        retries: int,
    ) -> None:
        if isinstance(error, UnexpectedCompletionError):
            logger.error(
                "completion_failed_unexpectedly",
                request=description,
                retry_count=retries,
                error=str(cause),
                exc_info=cause,
            )
            return

        log = logger.warning if isinstance(error, RateLimitedError) else logger.error
        log(
            "completion_failed",
            request=description,
            error_kind=type(error).__name__,
            retry_count=retries,
            error=str(cause),
        )
