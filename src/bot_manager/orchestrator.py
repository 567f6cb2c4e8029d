"""BotManager orchestrator for high-level bot operations.

This module provides the main entry point for the bot_manager package,
building storage, cache and completion provider implementations from
configuration and wiring the services on top of them.
"""

from typing import Any

from bot_manager.config import BotManagerConfig
from bot_manager.infra.llm import provider_class_for
from bot_manager.infra.memory.repository import InMemoryBotRepository
from bot_manager.infra.mongo.repositories import MongoBotRepository
from bot_manager.infra.redis.cache import RedisCache
from bot_manager.interfaces.cache import CacheInterface
from bot_manager.interfaces.completion import CompletionProviderInterface
from bot_manager.interfaces.storage import BotRepositoryInterface
from bot_manager.logging import get_logger
from bot_manager.services.bot_service import BotService
from bot_manager.services.completion_gateway import ChatCompletionGateway

__all__ = ["BotManager"]

logger = get_logger(__name__)


class BotManager:
    """Main orchestrator for bot_manager.

    Accepts implementation classes. Config is loaded from .env automatically.
    For custom implementations, set config_class = None and pass custom_config dict.

    Example:
        async with BotManager(
            storage_class=MongoBotRepository,
            llm_class=OpenAICompletionProvider,
        ) as manager:
            bot = await manager.bots.create(BotDTO(name="Helper"))
            answer = await manager.completions.complete_from_prompt("Hello")
    """

    def __init__(
        self,
        storage_class: type[BotRepositoryInterface],
        llm_class: type[CompletionProviderInterface] | None = None,
        cache_class: type[CacheInterface] | None = None,
        *,
        storage_custom_config: dict[str, Any] | None = None,
        llm_custom_config: dict[str, Any] | None = None,
        cache_custom_config: dict[str, Any] | None = None,
        config: BotManagerConfig | None = None,
    ) -> None:
        """Initialize BotManager with implementation classes.

        Args:
            storage_class: Bot repository implementation class
            llm_class: Completion provider class (completions disabled if None)
            cache_class: Cache class (defaults to RedisCache when Redis is configured)
            storage_custom_config: Custom config dict if storage_class.config_class is None
            llm_custom_config: Custom config dict if llm_class.config_class is None
            cache_custom_config: Custom config dict if cache_class.config_class is None
            config: Aggregated settings (loaded from .env if omitted)
        """
        self._config = config or BotManagerConfig()

        self._storage_class = storage_class
        self._llm_class = llm_class
        self._cache_class = cache_class
        if self._cache_class is None and self._config.redis_enabled:
            self._cache_class = RedisCache

        self._storage_custom_config = storage_custom_config
        self._llm_custom_config = llm_custom_config
        self._cache_custom_config = cache_custom_config

        # Instances (created on connect)
        self._storage: BotRepositoryInterface | None = None
        self._llm: CompletionProviderInterface | None = None
        self._cache: CacheInterface | None = None

        # Services (wired on connect)
        self._bot_service: BotService | None = None
        self._gateway: ChatCompletionGateway | None = None

        self._connected = False

    @classmethod
    def from_config(cls, config: BotManagerConfig | None = None) -> "BotManager":
        """Build a BotManager whose implementations are chosen by settings.

        The storage backend follows ``storage_backend``; a completion
        provider is configured only when an API key is present.
        """
        config = config or BotManagerConfig()
        if config.storage_backend == "mongo":
            storage_class: type[BotRepositoryInterface] = MongoBotRepository
            storage_custom_config = None
        else:
            storage_class = InMemoryBotRepository
            storage_custom_config = {}

        llm_class = provider_class_for(config.llm.provider) if config.llm.has_api_key else None
        return cls(
            storage_class=storage_class,
            llm_class=llm_class,
            storage_custom_config=storage_custom_config,
            config=config,
        )

    @property
    def config(self) -> BotManagerConfig:
        """Get the aggregated settings."""
        return self._config

    def _settings_for(self, config_class: type) -> Any:
        """Pick the matching section of the aggregated config, if any."""
        for section in (self._config.mongo, self._config.redis, self._config.llm):
            if type(section) is config_class:
                return section
        return config_class()

    async def _instantiate_class(
        self,
        cls: type,
        custom_config: dict[str, Any] | None,
    ) -> Any:
        """Instantiate an implementation class.

        If cls.config_class is set, build it from the matching settings.
        If cls.config_class is None, use custom_config dict.
        """
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            if custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(custom_config)
        return await cls.from_config(self._settings_for(config_class))

    async def _connect(self) -> None:
        """Initialize connections and services."""
        if self._connected:
            return

        try:
            self._storage = await self._instantiate_class(
                self._storage_class, self._storage_custom_config
            )
            if self._cache_class is not None:
                self._cache = await self._instantiate_class(
                    self._cache_class, self._cache_custom_config
                )
            if self._llm_class is not None:
                self._llm = await self._instantiate_class(
                    self._llm_class, self._llm_custom_config
                )
        except Exception:
            # release whatever was opened before the failure
            await self._disconnect()
            raise

        self._bot_service = BotService(
            self._storage,
            self._cache,
            cache_ttl_seconds=self._config.cache_ttl_seconds,
        )
        if self._llm is not None:
            self._gateway = ChatCompletionGateway(self._llm, self._config.llm)

        self._connected = True
        logger.info(
            "bot_manager_connected",
            storage=self._storage_class.__name__,
            cache=self._cache_class.__name__ if self._cache_class else None,
            llm=self._llm_class.__name__ if self._llm_class else None,
        )

    async def _disconnect(self) -> None:
        """Close all connections."""
        for instance in (self._llm, self._cache, self._storage):
            if instance is not None and hasattr(instance, "close"):
                await instance.close()

        self._storage = None
        self._cache = None
        self._llm = None
        self._bot_service = None
        self._gateway = None
        self._connected = False
        logger.info("bot_manager_disconnected")

    async def __aenter__(self) -> "BotManager":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self._disconnect()

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise RuntimeError(
                "BotManager not connected. Use 'async with BotManager(...) as manager:'"
            )

    @property
    def bots(self) -> BotService:
        """Get the bot service.

        Raises:
            RuntimeError: If not connected
        """
        self._ensure_connected()
        assert self._bot_service is not None
        return self._bot_service

    @property
    def completions(self) -> ChatCompletionGateway:
        """Get the chat completion gateway.

        Raises:
            RuntimeError: If not connected or no completion provider is configured
        """
        self._ensure_connected()
        if self._gateway is None:
            raise RuntimeError(
                "No completion provider configured. Set BOT_MANAGER_LLM_API_KEY."
            )
        return self._gateway

    @property
    def has_completions(self) -> bool:
        """Check if a completion provider is available."""
        return self._gateway is not None
