"""Shared test fixtures for bot_manager.

This module provides pytest fixtures used across all tests.
"""

from unittest.mock import AsyncMock

import pytest

from bot_manager.config import LLMSettings
from bot_manager.infra.memory.repository import InMemoryBotRepository
from bot_manager.models.bot import BotDTO, BotIntegrationDTO, IntegrationType
from bot_manager.models.chat import ChatMessage
from mocks.mock_provider import RecordingSleep


# Mock fixtures
@pytest.fixture
def mock_repository() -> AsyncMock:
    """Create mock bot repository."""
    repository = AsyncMock()
    repository.get_by_id.return_value = None
    repository.get_all.return_value = []
    repository.get_active.return_value = []
    repository.get_by_name.return_value = None
    repository.exists.return_value = False
    return repository


@pytest.fixture
def mock_cache() -> AsyncMock:
    """Create mock cache interface."""
    cache = AsyncMock()
    cache.get_string.return_value = None
    return cache


@pytest.fixture
def memory_repository() -> InMemoryBotRepository:
    """Create empty in-memory repository."""
    return InMemoryBotRepository()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Create sleep replacement recording backoff delays."""
    return RecordingSleep()


@pytest.fixture
def llm_settings() -> LLMSettings:
    """Create LLM settings with the default retry policy."""
    return LLMSettings(api_key="test-key", max_retries=3, retry_backoff_base=2.0)


# Sample data fixtures
@pytest.fixture
def sample_bot() -> BotDTO:
    """Create sample BotDTO."""
    return BotDTO(
        id="bot-1",
        name="Support Bot",
        type="Chat",
        description="Answers support questions",
        is_active=True,
        created_on=1704067200,
        configuration={"language": "en"},
        integrations=[
            BotIntegrationDTO(
                type=IntegrationType.AZURE,
                is_enabled=True,
                configuration={"region": "westeurope"},
            )
        ],
    )


@pytest.fixture
def sample_history() -> list[ChatMessage]:
    """Create sample conversation history."""
    return [
        ChatMessage.system("You are a helpful assistant."),
        ChatMessage.user("What is the capital of France?"),
        ChatMessage.assistant("Paris."),
        ChatMessage.user("And of Italy?"),
    ]
