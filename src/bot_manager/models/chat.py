"""Chat message models for bot_manager.

A conversation history is a plain sequence of ``ChatMessage`` built per
call by the caller; it is never persisted.
"""

from enum import StrEnum

from pydantic import BaseModel

__all__ = [
    "ChatRole",
    "ChatMessage",
    "ChatHistory",
]


class ChatRole(StrEnum):
    """Author role of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel, frozen=True):
    """Single message in a conversation.

    Attributes:
        role: Message author role
        content: Message text content
    """

    role: ChatRole
    content: str

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=ChatRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role=ChatRole.ASSISTANT, content=content)

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=ChatRole.SYSTEM, content=content)


ChatHistory = list[ChatMessage]
