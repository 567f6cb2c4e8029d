"""Bot entity validation for bot_manager."""

from bot_manager.errors import ValidationFailedError
from bot_manager.models.bot import BotDTO, BotIntegrationDTO

__all__ = [
    "MAX_NAME_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "collect_bot_errors",
    "validate_bot",
]

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def _integration_errors(index: int, integration: BotIntegrationDTO) -> list[str]:
    if integration.is_enabled and not integration.configuration:
        return [f"Integration {index}: configuration is required when integration is enabled"]
    return []


def collect_bot_errors(bot: BotDTO) -> list[str]:
    """Return every field rule the bot violates, in rule order."""
    errors: list[str] = []

    if not bot.name or not bot.name.strip():
        errors.append("Bot name is required")
    elif len(bot.name) > MAX_NAME_LENGTH:
        errors.append(f"Bot name cannot exceed {MAX_NAME_LENGTH} characters")

    if bot.description is not None and len(bot.description) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")

    for index, integration in enumerate(bot.integrations):
        errors.extend(_integration_errors(index, integration))

    return errors


def validate_bot(bot: BotDTO) -> None:
    """Validate bot field invariants.

    Raises:
        ValidationFailedError: Carrying all violations found
    """
    errors = collect_bot_errors(bot)
    if errors:
        raise ValidationFailedError(errors)
