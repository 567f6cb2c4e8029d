"""Pydantic schemas for API request/response validation.

Field limits are deliberately absent here; the bot validator reports
every rule violation at once.
"""

from pydantic import BaseModel, Field, model_validator

from bot_manager.models.bot import BotDTO, BotIntegrationDTO
from bot_manager.models.chat import ChatMessage

__all__ = [
    "BotCreate",
    "BotUpdate",
    "CompletionBody",
    "CompletionResponse",
    "ErrorResponse",
]


# Bot schemas


class BotCreate(BaseModel):
    """Request schema for creating a bot."""

    name: str = ""
    type: str = "Other"
    description: str | None = None
    is_active: bool = True
    configuration: dict[str, str] = Field(default_factory=dict)
    integrations: list[BotIntegrationDTO] = Field(default_factory=list)

    def to_bot(self) -> BotDTO:
        return BotDTO(
            name=self.name,
            type=self.type,
            description=self.description,
            is_active=self.is_active,
            configuration=self.configuration,
            integrations=self.integrations,
        )


class BotUpdate(BaseModel):
    """Request schema for replacing a bot's editable fields.

    ``id`` may be omitted; when present it must match the path.
    """

    id: str | None = None
    name: str = ""
    type: str = "Other"
    description: str | None = None
    configuration: dict[str, str] = Field(default_factory=dict)
    integrations: list[BotIntegrationDTO] = Field(default_factory=list)

    def to_bot(self, bot_id: str) -> BotDTO:
        return BotDTO(
            id=bot_id,
            name=self.name,
            type=self.type,
            description=self.description,
            configuration=self.configuration,
            integrations=self.integrations,
        )


# Completion schemas


class CompletionBody(BaseModel):
    """Request schema for a chat completion.

    Exactly one of ``prompt`` or ``messages`` must be given.
    """

    prompt: str | None = None
    messages: list[ChatMessage] | None = None

    @model_validator(mode="after")
    def _one_input(self) -> "CompletionBody":
        if (self.prompt is None) == (self.messages is None):
            raise ValueError("Provide either 'prompt' or 'messages'.")
        return self


class CompletionResponse(BaseModel):
    """Response schema for a chat completion."""

    content: str


class ErrorResponse(BaseModel):
    """Error envelope returned for 4xx/5xx responses."""

    message: str
    errors: list[str] = Field(default_factory=list)
