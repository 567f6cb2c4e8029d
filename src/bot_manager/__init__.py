"""bot_manager - Bot management with a resilient chat completion gateway.

This package provides tools for:
- Creating, updating, toggling and deleting named bots with unique names
- Read-through caching of bot lookups (Redis, optional)
- Validated chat completions with exponential-backoff retries and
  typed error translation (OpenAI or Anthropic)
- A REST API (FastAPI) and an interactive console menu (typer + rich)

Example usage:
    from bot_manager import BotDTO, BotManager, InMemoryBotRepository, OpenAICompletionProvider

    async with BotManager(
        storage_class=InMemoryBotRepository,
        llm_class=OpenAICompletionProvider,
        storage_custom_config={},
    ) as manager:
        bot = await manager.bots.create(BotDTO(name="Helper", type="Chat"))
        answer = await manager.completions.complete_from_prompt("Hello!")
"""

__version__ = "0.1.0"

# Errors
from bot_manager.errors import (
    AuthenticationFailedError,
    CompletionError,
    CompletionTimeoutError,
    DuplicateBotIdError,
    DuplicateBotNameError,
    InvalidInputError,
    RateLimitedError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    UnexpectedCompletionError,
    ValidationFailedError,
)

# Implementations
from bot_manager.infra.llm.anthropic_provider import AnthropicCompletionProvider
from bot_manager.infra.llm.openai_provider import OpenAICompletionProvider
from bot_manager.infra.memory.repository import InMemoryBotRepository
from bot_manager.infra.mongo.repositories import MongoBotRepository
from bot_manager.infra.redis.cache import RedisCache

# Interfaces
from bot_manager.interfaces.cache import CacheInterface
from bot_manager.interfaces.completion import CompletionProviderInterface
from bot_manager.interfaces.storage import BotRepositoryInterface

# Models
from bot_manager.models.bot import BotDTO, BotIntegrationDTO, BotStatistics, IntegrationType
from bot_manager.models.chat import ChatMessage, ChatRole

# Orchestrator and services
from bot_manager.orchestrator import BotManager
from bot_manager.services.bot_service import BotService
from bot_manager.services.completion_gateway import ChatCompletionGateway

__all__ = [  # noqa: RUF022
    # Orchestrator and services
    "BotManager",
    "BotService",
    "ChatCompletionGateway",
    # Implementations
    "InMemoryBotRepository",
    "MongoBotRepository",
    "RedisCache",
    "OpenAICompletionProvider",
    "AnthropicCompletionProvider",
    # Interfaces
    "BotRepositoryInterface",
    "CacheInterface",
    "CompletionProviderInterface",
    # Models
    "BotDTO",
    "BotIntegrationDTO",
    "BotStatistics",
    "IntegrationType",
    "ChatMessage",
    "ChatRole",
    # Errors
    "AuthenticationFailedError",
    "CompletionError",
    "CompletionTimeoutError",
    "DuplicateBotIdError",
    "DuplicateBotNameError",
    "InvalidInputError",
    "RateLimitedError",
    "ResourceNotFoundError",
    "ServiceUnavailableError",
    "UnexpectedCompletionError",
    "ValidationFailedError",
]
