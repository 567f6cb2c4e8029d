"""Unit tests for BotService."""

from unittest.mock import AsyncMock

import pytest

from bot_manager.errors import DuplicateBotNameError, ValidationFailedError
from bot_manager.infra.memory.repository import InMemoryBotRepository
from bot_manager.models.bot import BotDTO, BotIntegrationDTO, IntegrationType
from bot_manager.services.bot_service import CACHE_KEY_PREFIX, BotService


class TestCreate:
    """Tests for BotService.create."""

    @pytest.mark.asyncio
    async def test_create_unique_name(self, memory_repository: InMemoryBotRepository) -> None:
        service = BotService(memory_repository)

        bot = await service.create(BotDTO(name="X", type="Chat", last_active=123))

        assert bot.id
        assert bot.last_active is None
        assert await memory_repository.get_by_id(bot.id) == bot

    @pytest.mark.asyncio
    async def test_create_duplicate_name_fails(
        self, memory_repository: InMemoryBotRepository
    ) -> None:
        service = BotService(memory_repository)
        await service.create(BotDTO(name="X"))

        with pytest.raises(ValidationFailedError, match="already exists"):
            await service.create(BotDTO(name="X"))

        assert len(await memory_repository.get_all()) == 1

    @pytest.mark.asyncio
    async def test_create_invalid_bot_fails_before_storage(self, mock_repository: AsyncMock) -> None:
        service = BotService(mock_repository)
        bot = BotDTO(
            name="ok",
            integrations=[BotIntegrationDTO(type=IntegrationType.GOOGLE, is_enabled=True)],
        )

        with pytest.raises(ValidationFailedError):
            await service.create(bot)

        mock_repository.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_stamps_created_on(self, mock_repository: AsyncMock) -> None:
        service = BotService(mock_repository)

        bot = await service.create(BotDTO(name="X", created_on=1))

        assert bot.created_on > 1
        mock_repository.add.assert_awaited_once_with(bot)

    @pytest.mark.asyncio
    async def test_create_never_replaces_existing_bot(
        self, memory_repository: InMemoryBotRepository
    ) -> None:
        service = BotService(memory_repository)
        first = await service.create(BotDTO(name="Alpha"))

        second = await service.create(BotDTO(id=first.id, name="Beta"))

        assert second.id != first.id
        assert await memory_repository.get_by_id(first.id) == first
        assert {b.name for b in await memory_repository.get_all()} == {"Alpha", "Beta"}


class TestGetById:
    """Tests for the read-through cache."""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_storage(
        self, mock_repository: AsyncMock, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        mock_cache.get_string.return_value = sample_bot.model_dump_json()
        service = BotService(mock_repository, mock_cache)

        assert await service.get_by_id(sample_bot.id) == sample_bot
        mock_repository.get_by_id.assert_not_called()
        mock_cache.get_string.assert_awaited_once_with(f"{CACHE_KEY_PREFIX}{sample_bot.id}")

    @pytest.mark.asyncio
    async def test_cache_miss_populates_cache(
        self, mock_repository: AsyncMock, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        mock_repository.get_by_id.return_value = sample_bot
        service = BotService(mock_repository, mock_cache)

        assert await service.get_by_id(sample_bot.id) == sample_bot
        mock_cache.set_string.assert_awaited_once_with(
            f"bot:{sample_bot.id}", sample_bot.model_dump_json(), 600
        )

    @pytest.mark.asyncio
    async def test_absent_everywhere(self, mock_repository: AsyncMock, mock_cache: AsyncMock) -> None:
        service = BotService(mock_repository, mock_cache)

        assert await service.get_by_id("missing") is None
        mock_cache.set_string.assert_not_called()

    @pytest.mark.asyncio
    async def test_cache_failure_falls_back_to_storage(
        self, mock_repository: AsyncMock, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        mock_cache.get_string.side_effect = ConnectionError("cache down")
        mock_cache.set_string.side_effect = ConnectionError("cache down")
        mock_repository.get_by_id.return_value = sample_bot
        service = BotService(mock_repository, mock_cache)

        assert await service.get_by_id(sample_bot.id) == sample_bot

    @pytest.mark.asyncio
    async def test_corrupt_cache_entry_is_a_miss(
        self, mock_repository: AsyncMock, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        mock_cache.get_string.return_value = "{not json"
        mock_repository.get_by_id.return_value = sample_bot
        service = BotService(mock_repository, mock_cache)

        assert await service.get_by_id(sample_bot.id) == sample_bot

    @pytest.mark.asyncio
    async def test_custom_ttl(
        self, mock_repository: AsyncMock, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        mock_repository.get_by_id.return_value = sample_bot
        service = BotService(mock_repository, mock_cache, cache_ttl_seconds=30)

        await service.get_by_id(sample_bot.id)

        assert mock_cache.set_string.await_args.args[2] == 30


class TestUpdate:
    """Tests for BotService.update."""

    @pytest.mark.asyncio
    async def test_update_missing_returns_false(self, memory_repository: InMemoryBotRepository) -> None:
        service = BotService(memory_repository)
        assert await service.update(BotDTO(id="missing", name="X")) is False

    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_invalidates(
        self, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        repository = InMemoryBotRepository([sample_bot])
        service = BotService(repository, mock_cache)
        changes = BotDTO(
            id=sample_bot.id,
            name="Renamed",
            type="Automation",
            description="new",
            is_active=False,
            configuration={"a": "b"},
        )

        assert await service.update(changes) is True

        stored = await repository.get_by_id(sample_bot.id)
        assert stored is not None
        assert stored.name == "Renamed"
        assert stored.type == "Automation"
        assert stored.description == "new"
        assert stored.configuration == {"a": "b"}
        assert stored.integrations == []
        assert stored.is_active is True
        assert stored.created_on == sample_bot.created_on
        mock_cache.remove.assert_awaited_once_with(f"bot:{sample_bot.id}")

    @pytest.mark.asyncio
    async def test_update_keeping_own_name(self, sample_bot: BotDTO) -> None:
        service = BotService(InMemoryBotRepository([sample_bot]))
        changes = sample_bot.model_copy(update={"description": "changed"})
        assert await service.update(changes) is True

    @pytest.mark.asyncio
    async def test_update_name_collision_fails(self, sample_bot: BotDTO) -> None:
        other = BotDTO(id="bot-2", name="Other Bot")
        repository = InMemoryBotRepository([sample_bot, other])
        service = BotService(repository)

        with pytest.raises(DuplicateBotNameError):
            await service.update(other.model_copy(update={"name": sample_bot.name}))

        stored = await repository.get_by_id("bot-2")
        assert stored is not None
        assert stored.name == "Other Bot"

    @pytest.mark.asyncio
    async def test_update_invalid_fails(self, sample_bot: BotDTO) -> None:
        service = BotService(InMemoryBotRepository([sample_bot]))
        with pytest.raises(ValidationFailedError):
            await service.update(sample_bot.model_copy(update={"name": ""}))


class TestDelete:
    """Tests for BotService.delete."""

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, memory_repository: InMemoryBotRepository) -> None:
        assert await BotService(memory_repository).delete("missing") is False

    @pytest.mark.asyncio
    async def test_delete_removes_and_invalidates(
        self, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        service = BotService(InMemoryBotRepository([sample_bot]), mock_cache)

        assert await service.delete(sample_bot.id) is True
        assert await service.get_by_id(sample_bot.id) is None
        mock_cache.remove.assert_awaited_once_with(f"bot:{sample_bot.id}")

    @pytest.mark.asyncio
    async def test_cache_failure_does_not_fail_delete(
        self, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        mock_cache.remove.side_effect = ConnectionError("cache down")
        service = BotService(InMemoryBotRepository([sample_bot]), mock_cache)

        assert await service.delete(sample_bot.id) is True


class TestToggleStatus:
    """Tests for BotService.toggle_status."""

    @pytest.mark.asyncio
    async def test_toggle_missing_returns_false(self, memory_repository: InMemoryBotRepository) -> None:
        assert await BotService(memory_repository).toggle_status("missing", True) is False

    @pytest.mark.asyncio
    async def test_already_in_state_is_noop(
        self, mock_cache: AsyncMock, sample_bot: BotDTO
    ) -> None:
        bot = sample_bot.model_copy(update={"last_active": 1704067300})
        repository = InMemoryBotRepository([bot])
        service = BotService(repository, mock_cache)

        assert await service.toggle_status(bot.id, True) is True

        stored = await repository.get_by_id(bot.id)
        assert stored is not None
        assert stored.last_active == 1704067300
        mock_cache.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_activate_stamps_last_active(self, sample_bot: BotDTO) -> None:
        bot = sample_bot.model_copy(update={"is_active": False})
        repository = InMemoryBotRepository([bot])

        assert await BotService(repository).toggle_status(bot.id, True) is True

        stored = await repository.get_by_id(bot.id)
        assert stored is not None
        assert stored.is_active is True
        assert stored.last_active is not None

    @pytest.mark.asyncio
    async def test_deactivate(self, mock_cache: AsyncMock, sample_bot: BotDTO) -> None:
        repository = InMemoryBotRepository([sample_bot])

        assert await BotService(repository, mock_cache).toggle_status(sample_bot.id, False) is True

        stored = await repository.get_by_id(sample_bot.id)
        assert stored is not None
        assert stored.is_active is False
        assert stored.last_active is None
        mock_cache.remove.assert_awaited_once()


class TestListingAndStatistics:
    """Tests for list operations and statistics."""

    @pytest.mark.asyncio
    async def test_get_active(self, memory_repository: InMemoryBotRepository) -> None:
        service = BotService(memory_repository)
        await service.create(BotDTO(name="on"))
        await service.create(BotDTO(name="off", is_active=False))

        assert [b.name for b in await service.get_all()] == ["on", "off"]
        assert [b.name for b in await service.get_active()] == ["on"]

    @pytest.mark.asyncio
    async def test_statistics(self, memory_repository: InMemoryBotRepository) -> None:
        service = BotService(memory_repository)
        await service.create(BotDTO(name="a", type="Chat"))
        await service.create(BotDTO(name="b", type="Chat", is_active=False))
        await service.create(BotDTO(name="c", type="Analytics"))

        stats = await service.get_statistics()

        assert stats.total == 3
        assert stats.active == 2
        assert stats.inactive == 1
        assert stats.by_type == {"Chat": 2, "Analytics": 1}

    @pytest.mark.asyncio
    async def test_statistics_empty(self, memory_repository: InMemoryBotRepository) -> None:
        stats = await BotService(memory_repository).get_statistics()
        assert stats.total == 0
        assert stats.by_type == {}
