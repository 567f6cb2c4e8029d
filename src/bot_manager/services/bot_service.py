"""Bot management service for bot_manager.

This module provides create/read/update/delete/toggle operations on
bots with name uniqueness and an optional read-through cache.
"""

from collections import Counter

from pydantic import ValidationError

from bot_manager.errors import DuplicateBotNameError
from bot_manager.interfaces.cache import CacheInterface
from bot_manager.interfaces.storage import BotRepositoryInterface
from bot_manager.logging import get_logger
from bot_manager.models.bot import BotDTO, BotStatistics
from bot_manager.services.bot_validation import validate_bot
from bot_manager.utils.ids import epoch_now, new_bot_id

__all__ = [
    "BotService",
    "CACHE_KEY_PREFIX",
    "DEFAULT_CACHE_TTL_SECONDS",
]

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "bot:"
DEFAULT_CACHE_TTL_SECONDS = 600


class BotService:
    """Service for bot lifecycle operations.

    Handles:
    - Field validation and name uniqueness on create/update
    - Timestamp stamping on create and activation
    - Read-through caching of single-bot lookups, invalidated on
      every mutation

    The cache is best-effort: cache failures are logged and fall back
    to storage, they never fail an operation.

    Example:
        service = BotService(repository, cache)
        bot = await service.create(BotDTO(name="Helper", type="Chat"))
        await service.toggle_status(bot.id, False)
    """

    def __init__(
        self,
        repository: BotRepositoryInterface,
        cache: CacheInterface | None = None,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            repository: Bot storage
            cache: Optional key/value cache for get_by_id
            cache_ttl_seconds: Expiration of cached entries
        """
        self._repository = repository
        self._cache = cache
        self._cache_ttl = cache_ttl_seconds

    @staticmethod
    def _cache_key(bot_id: str) -> str:
        return f"{CACHE_KEY_PREFIX}{bot_id}"

    async def create(self, bot: BotDTO) -> BotDTO:
        """Create a new bot.

        Args:
            bot: Bot data; a fresh ID is assigned and the creation
                timestamp and last-active are reset

        Returns:
            The stored bot

        Raises:
            ValidationFailedError: If a field rule is violated or the
                name already exists
        """
        validate_bot(bot)

        if await self._repository.get_by_name(bot.name) is not None:
            raise DuplicateBotNameError(bot.name)

        stored = bot.model_copy(
            update={"id": new_bot_id(), "created_on": epoch_now(), "last_active": None}
        )
        await self._repository.add(stored)

        logger.info("bot_created", bot_id=stored.id, name=stored.name)
        return stored

    async def get_by_id(self, bot_id: str) -> BotDTO | None:
        """Get a bot by ID, consulting the cache first.

        Args:
            bot_id: Bot ID

        Returns:
            BotDTO if found, None otherwise
        """
        cached = await self._read_cache(bot_id)
        if cached is not None:
            return cached

        bot = await self._repository.get_by_id(bot_id)
        if bot is not None:
            await self._write_cache(bot)
        return bot

    async def get_all(self) -> list[BotDTO]:
        """Get all bots (uncached)."""
        return await self._repository.get_all()

    async def get_active(self) -> list[BotDTO]:
        """Get active bots (uncached)."""
        return await self._repository.get_active()

    async def update(self, bot: BotDTO) -> bool:
        """Replace the editable fields of an existing bot.

        Name, type, description, configuration and integrations are
        taken from ``bot``; identity, status and timestamps are kept.

        Args:
            bot: Bot data, matched by ID

        Returns:
            True if updated, False if no bot has this ID

        Raises:
            ValidationFailedError: If a field rule is violated or the
                name belongs to a different bot
        """
        validate_bot(bot)

        existing = await self._repository.get_by_id(bot.id)
        if existing is None:
            return False

        holder = await self._repository.get_by_name(bot.name)
        if holder is not None and holder.id != bot.id:
            raise DuplicateBotNameError(bot.name)

        await self._repository.update(existing.with_changes_from(bot))
        await self._invalidate(bot.id)

        logger.info("bot_updated", bot_id=bot.id)
        return True

    async def delete(self, bot_id: str) -> bool:
        """Delete a bot.

        Args:
            bot_id: Bot ID

        Returns:
            True if deleted, False if no bot has this ID
        """
        existing = await self._repository.get_by_id(bot_id)
        if existing is None:
            return False

        await self._repository.delete(bot_id)
        await self._invalidate(bot_id)

        logger.info("bot_deleted", bot_id=bot_id)
        return True

    async def toggle_status(self, bot_id: str, is_active: bool) -> bool:
        """Set a bot's active flag.

        Already being in the requested state counts as success and
        changes nothing, including the last-active timestamp.

        Args:
            bot_id: Bot ID
            is_active: Desired state

        Returns:
            True on success, False if no bot has this ID
        """
        existing = await self._repository.get_by_id(bot_id)
        if existing is None:
            return False

        if existing.is_active == is_active:
            return True

        await self._repository.update(existing.with_status(is_active))
        await self._invalidate(bot_id)

        logger.info("bot_status_changed", bot_id=bot_id, is_active=is_active)
        return True

    async def get_statistics(self) -> BotStatistics:
        """Count bots overall, by status and by type."""
        bots = await self._repository.get_all()
        active = sum(1 for bot in bots if bot.is_active)
        by_type = Counter(bot.type for bot in bots)
        return BotStatistics(
            total=len(bots),
            active=active,
            inactive=len(bots) - active,
            by_type=dict(by_type.most_common()),
        )

    # Cache helpers

    async def _read_cache(self, bot_id: str) -> BotDTO | None:
        if self._cache is None:
            return None
        try:
            cached = await self._cache.get_string(self._cache_key(bot_id))
        except Exception as e:
            logger.warning("cache_read_failed", bot_id=bot_id, error=str(e))
            return None
        if not cached:
            return None
        try:
            return BotDTO.model_validate_json(cached)
        except ValidationError as e:
            logger.warning("cache_entry_invalid", bot_id=bot_id, error=str(e))
            return None

    async def _write_cache(self, bot: BotDTO) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.set_string(
                self._cache_key(bot.id),
                bot.model_dump_json(),
                self._cache_ttl,
            )
        except Exception as e:
            logger.warning("cache_write_failed", bot_id=bot.id, error=str(e))

    async def _invalidate(self, bot_id: str) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.remove(self._cache_key(bot_id))
        except Exception as e:
            logger.warning("cache_invalidate_failed", bot_id=bot_id, error=str(e))
