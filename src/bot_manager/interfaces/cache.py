"""Cache interface for bot_manager.

This module defines the Protocol for the key/value cache used
for read-through bot lookups.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "CacheInterface",
]


@runtime_checkable
class CacheInterface(Protocol):
    """Contract for a string key/value cache with expiration.

    Callers treat the cache as best-effort: a miss and a failure
    both lead back to storage.
    """

    async def get_string(self, key: str) -> str | None:
        """Get a cached value.

        Args:
            key: Cache key

        Returns:
            Cached text, or None on a miss
        """
        ...

    async def set_string(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value with an absolute expiration.

        Args:
            key: Cache key
            value: Text to cache
            ttl_seconds: Expiration relative to now, in seconds
        """
        ...

    async def remove(self, key: str) -> None:
        """Invalidate a cached value.

        Args:
            key: Cache key
        """
        ...
