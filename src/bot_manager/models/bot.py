"""Bot models for bot_manager.

These models represent managed bots and their provider integrations.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from bot_manager.utils.ids import epoch_now, new_bot_id

__all__ = [
    "IntegrationType",
    "BotIntegrationDTO",
    "BotDTO",
    "BotStatistics",
]


class IntegrationType(StrEnum):
    """Provider kinds a bot can be attached to."""

    GOOGLE = "google"
    AZURE = "azure"
    SMART_THINGS = "smartthings"


class BotIntegrationDTO(BaseModel, frozen=True):
    """Sub-configuration attaching a bot to one external provider.

    Integrations have no identity of their own; they are created,
    replaced and removed together with the owning bot.

    Attributes:
        type: Integration provider kind
        is_enabled: Whether the integration is active
        configuration: Provider-specific settings (required when enabled)
    """

    type: IntegrationType
    is_enabled: bool = False
    configuration: dict[str, str] = Field(default_factory=dict)


class BotDTO(BaseModel, frozen=True):
    """Public Bot data transfer object.

    Field limits (name length, description length, integration
    configuration) are checked by the bot validator rather than at
    construction, so invalid input can be reported as a whole.

    Attributes:
        id: Opaque unique identifier, generated once
        name: Display name, unique across all bots
        type: Free-form category tag (Chat, Automation, Analytics, ...)
        description: Optional free text
        is_active: Whether the bot is currently active
        created_on: Creation timestamp in epoch seconds
        last_active: Last activation timestamp in epoch seconds
        configuration: String-to-string settings
        integrations: Ordered provider integrations
        schema_version: Schema version for forward compatibility
    """

    id: str = Field(default_factory=new_bot_id)
    name: str
    type: str = Field(default="Other")
    description: str | None = Field(default=None)
    is_active: bool = Field(default=True)
    created_on: int = Field(default_factory=epoch_now, description="Epoch seconds")
    last_active: int | None = Field(default=None, description="Epoch seconds")
    configuration: dict[str, str] = Field(default_factory=dict)
    integrations: list[BotIntegrationDTO] = Field(default_factory=list)
    schema_version: int = Field(default=1)

    def with_changes_from(self, other: "BotDTO") -> "BotDTO":
        """Create a copy carrying the editable fields of ``other``.

        Identity, status and timestamps are kept from this bot.
        """
        return self.model_copy(
            update={
                "name": other.name,
                "type": other.type,
                "description": other.description,
                "configuration": dict(other.configuration),
                "integrations": list(other.integrations),
            }
        )

    def with_status(self, is_active: bool, now: int | None = None) -> "BotDTO":
        """Create a copy with the active flag set.

        Activating stamps ``last_active``; deactivating keeps the
        previous value.
        """
        update: dict[str, object] = {"is_active": is_active}
        if is_active:
            update["last_active"] = now if now is not None else epoch_now()
        return self.model_copy(update=update)


class BotStatistics(BaseModel, frozen=True):
    """Aggregate counts over all bots."""

    total: int = 0
    active: int = 0
    inactive: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
