"""Unit tests for bot repositories."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from bot_manager.config import MongoSettings
from bot_manager.errors import DuplicateBotIdError, DuplicateBotNameError
from bot_manager.infra.memory.repository import InMemoryBotRepository
from bot_manager.infra.mongo import client as mongo_client_module
from bot_manager.infra.mongo.client import MongoClient
from bot_manager.infra.mongo.repositories import MongoBotRepository
from bot_manager.interfaces.storage import BotRepositoryInterface
from bot_manager.models.bot import BotDTO, IntegrationType
from mocks.mock_mongo import MockMongoClient


@pytest.fixture
def mongo_client() -> MockMongoClient:
    return MockMongoClient()


@pytest_asyncio.fixture
async def mongo_repository(mongo_client: MockMongoClient) -> MongoBotRepository:
    await mongo_client.create_indexes()
    return MongoBotRepository(mongo_client)  # type: ignore[arg-type]


class TestInMemoryBotRepository:
    """Tests for InMemoryBotRepository."""

    def test_satisfies_interface(self, memory_repository: InMemoryBotRepository) -> None:
        assert isinstance(memory_repository, BotRepositoryInterface)

    @pytest.mark.asyncio
    async def test_from_dict_seeds_bots(self, sample_bot: BotDTO) -> None:
        repository = await InMemoryBotRepository.from_dict(
            {"bots": [sample_bot.model_dump()]}
        )
        assert await repository.get_by_id(sample_bot.id) == sample_bot

    @pytest.mark.asyncio
    async def test_crud(self, memory_repository: InMemoryBotRepository, sample_bot: BotDTO) -> None:
        await memory_repository.add(sample_bot)
        assert await memory_repository.get_with_integrations(sample_bot.id) == sample_bot

        renamed = sample_bot.model_copy(update={"name": "Renamed"})
        await memory_repository.update(renamed)
        assert await memory_repository.get_by_id(sample_bot.id) == renamed

        await memory_repository.delete(sample_bot.id)
        assert await memory_repository.get_by_id(sample_bot.id) is None
        await memory_repository.delete(sample_bot.id)

    @pytest.mark.asyncio
    async def test_predicates(self, memory_repository: InMemoryBotRepository) -> None:
        await memory_repository.add(BotDTO(name="a", type="Chat"))
        await memory_repository.add(BotDTO(name="b", type="Analytics", is_active=False))

        chats = await memory_repository.find(lambda b: b.type == "Chat")
        assert [b.name for b in chats] == ["a"]
        assert await memory_repository.exists(lambda b: b.name == "b") is True
        assert await memory_repository.exists(lambda b: b.name == "z") is False
        assert [b.name for b in await memory_repository.get_active()] == ["a"]

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, memory_repository: InMemoryBotRepository) -> None:
        await memory_repository.add(BotDTO(name="X"))
        with pytest.raises(DuplicateBotNameError):
            await memory_repository.add(BotDTO(name="X"))

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(
        self, memory_repository: InMemoryBotRepository, sample_bot: BotDTO
    ) -> None:
        await memory_repository.add(sample_bot)

        with pytest.raises(DuplicateBotIdError):
            await memory_repository.add(BotDTO(id=sample_bot.id, name="Different"))

        assert await memory_repository.get_by_id(sample_bot.id) == sample_bot

    @pytest.mark.asyncio
    async def test_get_by_name(
        self, memory_repository: InMemoryBotRepository, sample_bot: BotDTO
    ) -> None:
        await memory_repository.add(sample_bot)

        assert await memory_repository.get_by_name(sample_bot.name) == sample_bot
        assert await memory_repository.get_by_name("missing") is None

    @pytest.mark.asyncio
    async def test_concurrent_adds_keep_names_unique(
        self, memory_repository: InMemoryBotRepository
    ) -> None:
        results = await asyncio.gather(
            *(memory_repository.add(BotDTO(name="Same")) for _ in range(5)),
            return_exceptions=True,
        )

        assert sum(1 for r in results if r is None) == 1
        assert all(isinstance(r, DuplicateBotNameError) for r in results if r is not None)
        assert len(await memory_repository.get_all()) == 1


class TestMongoBotRepository:
    """Tests for MongoBotRepository against a fake collection."""

    @pytest.mark.asyncio
    async def test_creates_unique_indexes(self, mongo_client: MockMongoClient) -> None:
        await mongo_client.create_indexes()
        assert ("id", True) in mongo_client.bots.indexes
        assert ("name", True) in mongo_client.bots.indexes

    @pytest.mark.asyncio
    async def test_round_trip_preserves_nested_mappings(
        self, mongo_repository: MongoBotRepository, sample_bot: BotDTO
    ) -> None:
        await mongo_repository.add(sample_bot)

        stored = await mongo_repository.get_by_id(sample_bot.id)

        assert stored == sample_bot
        assert stored is not None
        assert stored.integrations[0].type == IntegrationType.AZURE

    @pytest.mark.asyncio
    async def test_document_layout(
        self,
        mongo_repository: MongoBotRepository,
        mongo_client: MockMongoClient,
        sample_bot: BotDTO,
    ) -> None:
        await mongo_repository.add(sample_bot)

        doc = await mongo_client.bots.find_one({"id": sample_bot.id})

        assert doc is not None
        assert doc["configuration"] == {"language": "en"}
        assert doc["integrations"][0]["type"] == "azure"

    @pytest.mark.asyncio
    async def test_duplicate_name_translated(self, mongo_repository: MongoBotRepository) -> None:
        await mongo_repository.add(BotDTO(name="X"))
        with pytest.raises(DuplicateBotNameError):
            await mongo_repository.add(BotDTO(name="X"))

    @pytest.mark.asyncio
    async def test_duplicate_id_translated(
        self, mongo_repository: MongoBotRepository, sample_bot: BotDTO
    ) -> None:
        await mongo_repository.add(sample_bot)

        with pytest.raises(DuplicateBotIdError):
            await mongo_repository.add(BotDTO(id=sample_bot.id, name="Different"))

        assert await mongo_repository.get_by_id(sample_bot.id) == sample_bot

    @pytest.mark.asyncio
    async def test_get_by_name_filters_server_side(
        self,
        mongo_repository: MongoBotRepository,
        mongo_client: MockMongoClient,
        sample_bot: BotDTO,
    ) -> None:
        await mongo_repository.add(sample_bot)
        mongo_client.bots.find = MagicMock(side_effect=AssertionError("full scan"))

        assert await mongo_repository.get_by_name(sample_bot.name) == sample_bot
        assert await mongo_repository.get_by_name("missing") is None

    @pytest.mark.asyncio
    async def test_update_to_taken_name_translated(
        self, mongo_repository: MongoBotRepository
    ) -> None:
        await mongo_repository.add(BotDTO(name="X"))
        other = BotDTO(name="Y")
        await mongo_repository.add(other)

        with pytest.raises(DuplicateBotNameError):
            await mongo_repository.update(other.model_copy(update={"name": "X"}))

    @pytest.mark.asyncio
    async def test_queries(self, mongo_repository: MongoBotRepository) -> None:
        await mongo_repository.add(BotDTO(name="a", type="Chat"))
        await mongo_repository.add(BotDTO(name="b", type="Chat", is_active=False))
        await mongo_repository.add(BotDTO(name="c", type="Other"))

        assert [b.name for b in await mongo_repository.get_all()] == ["a", "b", "c"]
        assert [b.name for b in await mongo_repository.get_active()] == ["a", "c"]
        chats = await mongo_repository.find(lambda b: b.type == "Chat")
        assert [b.name for b in chats] == ["a", "b"]
        assert await mongo_repository.exists(lambda b: b.name == "c") is True
        assert await mongo_repository.exists(lambda b: b.name == "d") is False

    @pytest.mark.asyncio
    async def test_delete(self, mongo_repository: MongoBotRepository, sample_bot: BotDTO) -> None:
        await mongo_repository.add(sample_bot)
        await mongo_repository.delete(sample_bot.id)
        assert await mongo_repository.get_with_integrations(sample_bot.id) is None

    @pytest.mark.asyncio
    async def test_close_only_disconnects_owned_client(
        self, mongo_client: MockMongoClient
    ) -> None:
        repository = MongoBotRepository(mongo_client)  # type: ignore[arg-type]
        await repository.close()
        assert mongo_client.disconnected is False


class TestMongoClient:
    """Tests for the Motor connection wrapper with a patched motor module."""

    def test_collection_requires_connection(self) -> None:
        with pytest.raises(RuntimeError, match="not connected"):
            _ = MongoClient(MongoSettings()).bots

    @pytest.mark.asyncio
    async def test_connect_uses_prefixed_collection(self, monkeypatch: pytest.MonkeyPatch) -> None:
        motor_client = MagicMock()
        motor_client.admin.command = AsyncMock(return_value={"ok": 1})
        monkeypatch.setattr(mongo_client_module, "get_async_motor", lambda: MagicMock(return_value=motor_client))

        client = MongoClient(MongoSettings(database="db", collection_prefix="test_"))
        await client.connect()
        _ = client.bots

        motor_client.admin.command.assert_awaited_once_with("ping")
        motor_client.__getitem__.assert_called_with("db")
        motor_client.__getitem__.return_value.__getitem__.assert_called_with("test_bots")

        await client.disconnect()
        motor_client.close.assert_called_once()
        assert client.is_connected is False

    @pytest.mark.asyncio
    async def test_failed_ping_closes_client(self, monkeypatch: pytest.MonkeyPatch) -> None:
        motor_client = MagicMock()
        motor_client.admin.command = AsyncMock(side_effect=ConnectionError("refused"))
        monkeypatch.setattr(mongo_client_module, "get_async_motor", lambda: MagicMock(return_value=motor_client))

        client = MongoClient(MongoSettings())

        with pytest.raises(ConnectionError):
            await client.connect()
        motor_client.close.assert_called_once()
        assert client.is_connected is False
