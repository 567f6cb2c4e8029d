"""MongoDB repositories for bot_manager.

This module provides the bot repository implementation for MongoDB
storage. Integrations and configuration are stored as sub-documents
of the bot document.
"""

from typing import Any, Self

from pymongo.errors import DuplicateKeyError

from bot_manager.config import MongoSettings
from bot_manager.errors import BotManagerError, DuplicateBotIdError, DuplicateBotNameError
from bot_manager.infra.mongo.client import MongoClient
from bot_manager.interfaces.storage import BotPredicate, BotRepositoryInterface
from bot_manager.logging import get_logger
from bot_manager.models.bot import BotDTO, BotIntegrationDTO, IntegrationType

__all__ = [
    "MongoBotRepository",
]

logger = get_logger(__name__)


class MongoBotRepository(BotRepositoryInterface):
    """MongoDB implementation of BotRepositoryInterface.

    Predicate queries are evaluated client-side over a streamed cursor;
    the active-bot lookup uses an indexed server-side filter.
    """

    config_class = MongoSettings

    def __init__(self, client: MongoClient) -> None:
        """Initialize repository with MongoDB client.

        Args:
            client: Connected MongoClient instance
        """
        self._client = client
        self._owns_client = False

    @classmethod
    async def from_config(cls, config: MongoSettings) -> Self:
        """Factory method for BotManager instantiation.

        Creates a MongoClient, connects, creates indexes, and returns repository.

        Args:
            config: MongoDB settings

        Returns:
            Connected MongoBotRepository instance
        """
        client = MongoClient(config)
        await client.connect()
        await client.create_indexes()

        instance = cls(client)
        instance._owns_client = True
        return instance

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict.

        Args:
            config: Dictionary with MongoDB settings

        Returns:
            Connected MongoBotRepository instance
        """
        return await cls.from_config(MongoSettings(**config))

    async def close(self) -> None:
        """Close owned resources."""
        if self._owns_client and self._client:
            await self._client.disconnect()

    async def get_by_id(self, bot_id: str) -> BotDTO | None:
        """Get bot by ID."""
        doc = await self._client.bots.find_one({"id": bot_id})
        return self._doc_to_bot(doc) if doc else None

    async def get_by_name(self, name: str) -> BotDTO | None:
        """Get bot by name using the unique name index."""
        doc = await self._client.bots.find_one({"name": name})
        return self._doc_to_bot(doc) if doc else None

    async def get_all(self) -> list[BotDTO]:
        """Get all bots in insertion order."""
        cursor = self._client.bots.find().sort("_id", 1)
        return [self._doc_to_bot(doc) async for doc in cursor]

    async def find(self, predicate: BotPredicate) -> list[BotDTO]:
        """Find bots matching a predicate."""
        cursor = self._client.bots.find().sort("_id", 1)
        result = []
        async for doc in cursor:
            bot = self._doc_to_bot(doc)
            if predicate(bot):
                result.append(bot)
        return result

    async def add(self, bot: BotDTO) -> None:
        """Insert a new bot."""
        try:
            await self._client.bots.insert_one(self._bot_to_doc(bot))
        except DuplicateKeyError as e:
            raise self._duplicate_error(bot, e) from e

    async def update(self, bot: BotDTO) -> None:
        """Replace a stored bot."""
        try:
            await self._client.bots.replace_one({"id": bot.id}, self._bot_to_doc(bot))
        except DuplicateKeyError as e:
            raise self._duplicate_error(bot, e) from e

    async def delete(self, bot_id: str) -> None:
        """Remove a bot."""
        await self._client.bots.delete_one({"id": bot_id})

    async def exists(self, predicate: BotPredicate) -> bool:
        """Check if any bot matches a predicate."""
        async for doc in self._client.bots.find():
            if predicate(self._doc_to_bot(doc)):
                return True
        return False

    async def get_active(self) -> list[BotDTO]:
        """Get all active bots."""
        cursor = self._client.bots.find({"is_active": True}).sort("_id", 1)
        return [self._doc_to_bot(doc) async for doc in cursor]

    async def get_with_integrations(self, bot_id: str) -> BotDTO | None:
        """Get bot by ID; integrations are embedded in the document."""
        return await self.get_by_id(bot_id)

    @staticmethod
    def _duplicate_error(bot: BotDTO, error: DuplicateKeyError) -> BotManagerError:
        # keyPattern names the unique index that was violated
        key_pattern = (error.details or {}).get("keyPattern") or {}
        if "id" in key_pattern:
            logger.warning("duplicate_bot_id_rejected", bot_id=bot.id)
            return DuplicateBotIdError(bot.id)
        logger.warning("duplicate_bot_rejected", bot_id=bot.id, name=bot.name)
        return DuplicateBotNameError(bot.name)

    # Document conversion helpers
    @staticmethod
    def _bot_to_doc(bot: BotDTO) -> dict[str, Any]:
        return {
            "id": bot.id,
            "name": bot.name,
            "type": bot.type,
            "description": bot.description,
            "is_active": bot.is_active,
            "created_on": bot.created_on,
            "last_active": bot.last_active,
            "configuration": dict(bot.configuration),
            "integrations": [
                {
                    "type": integration.type.value,
                    "is_enabled": integration.is_enabled,
                    "configuration": dict(integration.configuration),
                }
                for integration in bot.integrations
            ],
            "schema_version": bot.schema_version,
        }

    @staticmethod
    def _doc_to_bot(doc: dict[str, Any]) -> BotDTO:
        return BotDTO(
            id=doc["id"],
            name=doc["name"],
            type=doc.get("type", "Other"),
            description=doc.get("description"),
            is_active=doc.get("is_active", True),
            created_on=doc["created_on"],
            last_active=doc.get("last_active"),
            configuration=doc.get("configuration", {}),
            integrations=[
                BotIntegrationDTO(
                    type=IntegrationType(item["type"]),
                    is_enabled=item.get("is_enabled", False),
                    configuration=item.get("configuration", {}),
                )
                for item in doc.get("integrations", [])
            ],
            schema_version=doc.get("schema_version", 1),
        )
