"""Storage interface for bot_manager.

This module defines the Protocol for bot persistence.
"""

from collections.abc import Callable
from typing import ClassVar, Protocol, runtime_checkable

from bot_manager.models.bot import BotDTO

__all__ = [
    "BotPredicate",
    "BotRepositoryInterface",
]

BotPredicate = Callable[[BotDTO], bool]


@runtime_checkable
class BotRepositoryInterface(Protocol):
    """Contract for bot persistence.

    Implementations own integrations as part of the bot document;
    there is no separate integration storage.
    """

    config_class: ClassVar[type | None] = None

    async def get_by_id(self, bot_id: str) -> BotDTO | None:
        """Get a bot by ID.

        Args:
            bot_id: Bot ID to retrieve

        Returns:
            BotDTO if found, None otherwise
        """
        ...

    async def get_by_name(self, name: str) -> BotDTO | None:
        """Get the bot holding a name.

        Args:
            name: Exact bot name

        Returns:
            BotDTO if found, None otherwise
        """
        ...

    async def get_all(self) -> list[BotDTO]:
        """Get all bots.

        Returns:
            List of bots
        """
        ...

    async def find(self, predicate: BotPredicate) -> list[BotDTO]:
        """Find bots matching a predicate.

        Args:
            predicate: Callable returning True for bots to keep

        Returns:
            List of matching bots
        """
        ...

    async def add(self, bot: BotDTO) -> None:
        """Insert a new bot.

        Args:
            bot: Bot to insert

        Raises:
            DuplicateBotNameError: If the name is already taken
            DuplicateBotIdError: If a bot with the same ID is stored
        """
        ...

    async def update(self, bot: BotDTO) -> None:
        """Replace a stored bot.

        Args:
            bot: Updated bot data (matched by ID)

        Raises:
            DuplicateBotNameError: If the name is taken by another bot
        """
        ...

    async def delete(self, bot_id: str) -> None:
        """Remove a bot. Missing IDs are ignored.

        Args:
            bot_id: Bot ID to remove
        """
        ...

    async def exists(self, predicate: BotPredicate) -> bool:
        """Check if any bot matches a predicate.

        Args:
            predicate: Callable returning True for a match

        Returns:
            True if at least one bot matches
        """
        ...

    async def get_active(self) -> list[BotDTO]:
        """Get all active bots.

        Returns:
            List of bots with is_active set
        """
        ...

    async def get_with_integrations(self, bot_id: str) -> BotDTO | None:
        """Get a bot together with its integrations.

        Args:
            bot_id: Bot ID to retrieve

        Returns:
            BotDTO if found, None otherwise
        """
        ...
