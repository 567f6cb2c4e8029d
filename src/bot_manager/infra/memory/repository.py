"""In-memory bot repository for bot_manager.

Process-local storage used by the console and as the default
backend when no database is configured.
"""

import asyncio
from typing import Any, Self

from bot_manager.errors import DuplicateBotIdError, DuplicateBotNameError
from bot_manager.interfaces.storage import BotPredicate, BotRepositoryInterface
from bot_manager.logging import get_logger
from bot_manager.models.bot import BotDTO

__all__ = [
    "InMemoryBotRepository",
]

logger = get_logger(__name__)


class InMemoryBotRepository(BotRepositoryInterface):
    """Dict-backed implementation of BotRepositoryInterface.

    Bots are kept in insertion order. Writes hold a lock so the
    uniqueness checks and the write happen atomically.

    Takes no settings; build it with ``from_dict({})`` or directly.
    Seed bots can be passed as ``{"bots": [...]}``.
    """

    config_class = None

    def __init__(self, bots: list[BotDTO] | None = None) -> None:
        self._bots: dict[str, BotDTO] = {}
        self._lock = asyncio.Lock()
        for bot in bots or []:
            self._bots[bot.id] = bot

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for BotManager instantiation."""
        bots = [BotDTO.model_validate(item) for item in config.get("bots", [])]
        return cls(bots)

    async def close(self) -> None:
        """Nothing to release."""

    def _name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        return any(b.name == name and b.id != exclude_id for b in self._bots.values())

    async def get_by_id(self, bot_id: str) -> BotDTO | None:
        return self._bots.get(bot_id)

    async def get_by_name(self, name: str) -> BotDTO | None:
        return next((b for b in self._bots.values() if b.name == name), None)

    async def get_all(self) -> list[BotDTO]:
        return list(self._bots.values())

    async def find(self, predicate: BotPredicate) -> list[BotDTO]:
        return [bot for bot in self._bots.values() if predicate(bot)]

    async def add(self, bot: BotDTO) -> None:
        async with self._lock:
            if bot.id in self._bots:
                logger.warning("duplicate_bot_id_rejected", bot_id=bot.id)
                raise DuplicateBotIdError(bot.id)
            if self._name_taken(bot.name):
                logger.warning("duplicate_bot_rejected", bot_id=bot.id, name=bot.name)
                raise DuplicateBotNameError(bot.name)
            self._bots[bot.id] = bot

    async def update(self, bot: BotDTO) -> None:
        async with self._lock:
            if bot.id not in self._bots:
                return
            if self._name_taken(bot.name, exclude_id=bot.id):
                logger.warning("duplicate_bot_rejected", bot_id=bot.id, name=bot.name)
                raise DuplicateBotNameError(bot.name)
            self._bots[bot.id] = bot

    async def delete(self, bot_id: str) -> None:
        async with self._lock:
            self._bots.pop(bot_id, None)

    async def exists(self, predicate: BotPredicate) -> bool:
        return any(predicate(bot) for bot in self._bots.values())

    async def get_active(self) -> list[BotDTO]:
        return [bot for bot in self._bots.values() if bot.is_active]

    async def get_with_integrations(self, bot_id: str) -> BotDTO | None:
        return self._bots.get(bot_id)
