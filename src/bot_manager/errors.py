"""Error taxonomy for bot_manager.

Provider-side failures are raised by completion providers as ``ProviderError``
(or a plain ``TimeoutError``) and translated exactly once into a
``CompletionError`` subclass by :func:`translate_provider_error`. The
``retryable`` flag on the translated error is what the retry policy consults.
"""

from typing import ClassVar

__all__ = [
    "BotManagerError",
    "InvalidInputError",
    "ValidationFailedError",
    "DuplicateBotIdError",
    "DuplicateBotNameError",
    "ProviderError",
    "ProviderUnavailableError",
    "CompletionError",
    "AuthenticationFailedError",
    "RateLimitedError",
    "ResourceNotFoundError",
    "ServiceUnavailableError",
    "CompletionTimeoutError",
    "UnexpectedCompletionError",
    "translate_provider_error",
]


class BotManagerError(Exception):
    """Base class for all bot_manager errors."""


class InvalidInputError(BotManagerError, ValueError):
    """Caller-supplied prompt or history violates a validation rule.

    Attributes:
        argument: Name of the offending argument ("prompt" or "history")
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class ValidationFailedError(BotManagerError):
    """Bot entity invariant violation.

    Attributes:
        errors: Every rule violation found, in rule order
    """

    def __init__(self, errors: list[str] | str) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))


class DuplicateBotNameError(ValidationFailedError):
    """A bot with the requested name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__("A bot with this name already exists.")
        self.name = name


class DuplicateBotIdError(BotManagerError):
    """Storage already holds a bot with this ID; IDs are never reused."""

    def __init__(self, bot_id: str) -> None:
        super().__init__(f"A bot with ID '{bot_id}' already exists.")
        self.bot_id = bot_id


# Raw provider failures (pre-translation)


class ProviderError(Exception):
    """Transport-level failure reported by a completion provider.

    Attributes:
        status_code: HTTP-like status code, or None if the request
            never produced a response
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderUnavailableError(ProviderError):
    """The completion service could not be reached."""


# Translated failures


class CompletionError(BotManagerError):
    """Categorized chat completion failure."""

    retryable: ClassVar[bool] = False


class AuthenticationFailedError(CompletionError):
    """The provider rejected the credentials (401/403)."""


class RateLimitedError(CompletionError):
    """The provider throttled the request (429)."""


class ResourceNotFoundError(CompletionError):
    """The model or endpoint does not exist (404)."""


class ServiceUnavailableError(CompletionError):
    """The provider failed server-side or could not be reached."""

    retryable = True


class CompletionTimeoutError(CompletionError):
    """The provider did not answer in time."""

    retryable = True


class UnexpectedCompletionError(CompletionError):
    """Any uncategorized completion failure."""


def translate_provider_error(error: Exception) -> CompletionError:
    """Map a raw provider failure onto the completion error taxonomy.

    Args:
        error: Exception raised by a completion provider

    Returns:
        The translated error (the input itself if already translated)
    """
    if isinstance(error, CompletionError):
        return error

    if isinstance(error, TimeoutError):
        return CompletionTimeoutError(
            "The request timed out. Please check your connection and try again."
        )

    if isinstance(error, ProviderUnavailableError):
        return ServiceUnavailableError(
            "The AI service is currently unavailable. Please try again later."
        )

    if isinstance(error, ProviderError) and error.status_code is not None:
        status = error.status_code
        if status in (401, 403):
            return AuthenticationFailedError(
                "Authentication failed. Please check your API key and permissions."
            )
        if status == 429:
            return RateLimitedError(
                "Rate limit exceeded. Please wait before making more requests."
            )
        if status == 404:
            return ResourceNotFoundError(
                "The requested AI model was not found. Please check your configuration."
            )
        if status >= 500:
            return ServiceUnavailableError(
                "The AI service is currently unavailable. Please try again later."
            )

    return UnexpectedCompletionError(
        "An error occurred while processing your request. Please try again later."
    )
