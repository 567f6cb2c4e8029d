"""Redis cache implementation for bot_manager.

This module adapts the optional Redis client to the key/value
cache interface used by the bot service.
"""

from typing import Any, Self

from bot_manager.config import RedisSettings
from bot_manager.infra.redis.client import RedisClient
from bot_manager.interfaces.cache import CacheInterface
from bot_manager.logging import get_logger

__all__ = [
    "RedisCache",
]

logger = get_logger(__name__)


class RedisCache(CacheInterface):
    """Redis-backed string cache.

    Keys are namespaced with the configured prefix. Reads while Redis
    is unavailable are misses; writes and removals are skipped.
    """

    config_class = RedisSettings

    def __init__(self, redis_client: RedisClient, prefix: str = "bot_manager:") -> None:
        """Initialize cache.

        Args:
            redis_client: Redis client instance
            prefix: Key prefix applied to every cache key
        """
        self._redis = redis_client
        self._prefix = prefix
        self._owns_client = False

    @classmethod
    async def from_config(cls, config: RedisSettings) -> Self:
        """Factory method for BotManager instantiation.

        Connects a RedisClient; a failed connection still returns a
        usable (always-missing) cache.
        """
        client = RedisClient(config)
        await client.connect()
        instance = cls(client, prefix=config.key_prefix)
        instance._owns_client = True
        return instance

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict."""
        return await cls.from_config(RedisSettings(**config))

    @property
    def is_available(self) -> bool:
        """Check if the underlying Redis connection is up."""
        return self._redis.is_connected

    async def close(self) -> None:
        """Close owned resources."""
        if self._owns_client:
            await self._redis.disconnect()

    def _make_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get_string(self, key: str) -> str | None:
        """Get a cached value."""
        return await self._redis.get(self._make_key(key))

    async def set_string(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value with an absolute expiration."""
        if not await self._redis.set(self._make_key(key), value, ex=ttl_seconds):
            logger.debug("cache_set_skipped", key=key)

    async def remove(self, key: str) -> None:
        """Invalidate a cached value."""
        await self._redis.delete(self._make_key(key))
