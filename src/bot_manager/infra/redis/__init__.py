"""Redis infrastructure for bot_manager (optional)."""

from bot_manager.infra.redis.cache import RedisCache
from bot_manager.infra.redis.client import RedisClient

__all__ = ["RedisCache", "RedisClient"]
