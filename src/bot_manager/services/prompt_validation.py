"""Prompt and conversation history validation for bot_manager.

Pure, synchronous checks run before any network activity. The first
violation found determines the reported reason.
"""

from collections.abc import Sequence

from bot_manager.errors import InvalidInputError
from bot_manager.models.chat import ChatMessage

__all__ = [
    "MAX_PROMPT_LENGTH",
    "MAX_HISTORY_LENGTH",
    "BANNED_PHRASES",
    "validate_prompt",
    "validate_history",
]

MAX_PROMPT_LENGTH = 4000
MAX_HISTORY_LENGTH = 10
BANNED_PHRASES = (
    "hack",
    "password",
    "secret",
    "api key",
    "credit card",
    "ssn",
    "social security",
)


def _find_banned_phrase(text: str) -> str | None:
    lowered = text.lower()
    for phrase in BANNED_PHRASES:
        if phrase in lowered:
            return phrase
    return None


def validate_prompt(prompt: str | None) -> None:
    """Validate a single prompt.

    Checks, in order: emptiness, length, prohibited content.

    Args:
        prompt: Prompt text

    Raises:
        InvalidInputError: If the prompt is empty or whitespace, longer
            than MAX_PROMPT_LENGTH, or contains a banned phrase
    """
    if prompt is None or not prompt.strip():
        raise InvalidInputError("Prompt cannot be null or whitespace.", argument="prompt")

    if len(prompt) > MAX_PROMPT_LENGTH:
        raise InvalidInputError(
            f"Prompt length exceeds maximum allowed length of {MAX_PROMPT_LENGTH} characters.",
            argument="prompt",
        )

    phrase = _find_banned_phrase(prompt)
    if phrase is not None:
        raise InvalidInputError(f"Prompt contains prohibited content: {phrase}", argument="prompt")


def validate_history(history: Sequence[ChatMessage] | None) -> None:
    """Validate a conversation history.

    Checks, in order: presence, emptiness, length, then each message
    in sequence for blank or prohibited content.

    Args:
        history: Ordered chat messages

    Raises:
        InvalidInputError: If the history is missing, empty, longer than
            MAX_HISTORY_LENGTH, or holds a blank or prohibited message
    """
    if history is None:
        raise InvalidInputError("Chat history is required.", argument="history")

    if len(history) == 0:
        raise InvalidInputError("Chat history cannot be empty.", argument="history")

    if len(history) > MAX_HISTORY_LENGTH:
        raise InvalidInputError(
            f"Chat history exceeds maximum allowed length of {MAX_HISTORY_LENGTH} messages.",
            argument="history",
        )

    for message in history:
        if not message.content or not message.content.strip():
            raise InvalidInputError(
                "Chat history contains empty or whitespace messages.", argument="history"
            )

        phrase = _find_banned_phrase(message.content)
        if phrase is not None:
            raise InvalidInputError(
                f"Chat history contains prohibited content: {phrase}", argument="history"
            )
