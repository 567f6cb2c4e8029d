"""Redis connection for the bot lookup cache.

Redis is optional. With no URL configured, or when the server cannot be
reached, every command behaves like a cache miss so callers never have
to special-case an outage.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from bot_manager.config import RedisSettings
from bot_manager.logging import get_logger
from bot_manager.utils.lazy_import import lazy_import

if TYPE_CHECKING:
    from redis.asyncio import Redis

__all__ = [
    "RedisClient",
]

logger = get_logger(__name__)

get_async_redis = lazy_import("redis.asyncio", "Redis")

T = TypeVar("T")


class RedisClient:
    """Fail-soft async Redis connection.

    ``get`` answers None and ``set``/``delete`` answer False whenever
    Redis is disabled, not connected, or raises.

    Example:
        async with RedisClient(settings) as client:
            await client.set("bot:42", payload, ex=600)
            payload = await client.get("bot:42")
    """

    def __init__(self, settings: RedisSettings) -> None:
        self._settings = settings
        self._redis: "Redis | None" = None
        self._connected = False

    @property
    def is_enabled(self) -> bool:
        """True if a URL is configured and Redis was not switched off."""
        return self._settings.enabled and self._settings.url is not None

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> bool:
        """Open the connection and ping the server.

        Returns:
            True if Redis answered, False if caching stays off
        """
        if self._redis is not None:
            return self._connected
        if not self.is_enabled:
            logger.info("redis_disabled", reason="not configured")
            return False

        redis_cls = get_async_redis()
        try:
            self._redis = redis_cls.from_url(  # type: ignore[attr-defined]
                self._settings.url, decode_responses=True
            )
            await self._redis.ping()
        except Exception as e:
            logger.warning("redis_connection_failed", error=str(e), caching="disabled")
            self._redis = None
            self._connected = False
            return False

        self._connected = True
        logger.info("connected_to_redis", url=self._settings.url)
        return True

    async def disconnect(self) -> None:
        if self._redis is None:
            return
        await self._redis.aclose()
        self._redis = None
        self._connected = False
        logger.info("disconnected_from_redis")

    async def _run(
        self,
        command: str,
        key: str,
        call: Callable[["Redis"], Awaitable[T]],
        fallback: T,
    ) -> T:
        if not self._connected or self._redis is None:
            return fallback
        try:
            return await call(self._redis)
        except Exception as e:
            logger.warning("redis_command_failed", command=command, key=key, error=str(e))
            return fallback

    async def get(self, key: str) -> str | None:
        """Read a value; None on miss or failure."""
        return await self._run("get", key, lambda r: r.get(key), None)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """Write a value with an optional expiration in seconds."""

        async def _set(redis: "Redis") -> bool:
            await redis.set(key, value, ex=ex)
            return True

        return await self._run("set", key, _set, False)

    async def delete(self, key: str) -> bool:
        """Remove a key; True if the command reached Redis."""

        async def _delete(redis: "Redis") -> bool:
            await redis.delete(key)
            return True

        return await self._run("delete", key, _delete, False)

    async def __aenter__(self) -> "RedisClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
