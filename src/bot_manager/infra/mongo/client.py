"""Motor connection holding the bots collection."""

from typing import TYPE_CHECKING, Any

from bot_manager.config import MongoSettings
from bot_manager.logging import get_logger
from bot_manager.utils.lazy_import import lazy_import

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

__all__ = [
    "BOT_INDEXES",
    "MongoClient",
]

logger = get_logger(__name__)

get_async_motor = lazy_import("motor.motor_asyncio", "AsyncIOMotorClient")

# (field, unique); the unique name index serializes concurrent creates
BOT_INDEXES: tuple[tuple[str, bool], ...] = (
    ("id", True),
    ("name", True),
    ("is_active", False),
)


class MongoClient:
    """Async MongoDB connection for bot storage.

    Example:
        async with MongoClient(settings) as client:
            await client.create_indexes()
            doc = await client.bots.find_one({"id": bot_id})
    """

    def __init__(self, settings: MongoSettings) -> None:
        self._settings = settings
        self._client: "AsyncIOMotorClient[dict[str, Any]] | None" = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Connect and ping; raises if the server is unreachable."""
        if self._client is not None:
            return

        motor_client_cls = get_async_motor()
        client = motor_client_cls(self._settings.uri.get_secret_value())  # type: ignore[operator]
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            raise

        self._client = client
        logger.info("connected_to_mongodb", database=self._settings.database)

    async def disconnect(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        logger.info("disconnected_from_mongodb")

    @property
    def bots(self) -> "AsyncIOMotorCollection[dict[str, Any]]":
        """The bots collection, honoring the configured name prefix.

        Raises:
            RuntimeError: If not connected
        """
        if self._client is None:
            raise RuntimeError("MongoClient not connected. Call connect() first.")
        database = self._client[self._settings.database]
        return database[f"{self._settings.collection_prefix}bots"]

    async def create_indexes(self) -> None:
        for field, unique in BOT_INDEXES:
            await self.bots.create_index(field, unique=unique)
        logger.info("created_mongodb_indexes", count=len(BOT_INDEXES))

    async def __aenter__(self) -> "MongoClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
