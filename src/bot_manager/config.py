"""Configuration management for bot_manager.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from typing import Literal

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "MongoSettings",
    "RedisSettings",
    "ExecutionSettings",
    "LLMSettings",
    "LoggingSettings",
    "BotManagerConfig",
]


class MongoSettings(BaseSettings):
    """MongoDB connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="BOT_MANAGER_MONGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    uri: SecretStr = SecretStr("mongodb://localhost:27017")
    database: str = "bot_manager"
    collection_prefix: str = ""


class RedisSettings(BaseSettings):
    """Redis connection settings (optional).

    If url is not configured or connection fails, caching will be disabled.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOT_MANAGER_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = None
    enabled: bool = True  # Can be explicitly disabled
    key_prefix: str = "bot_manager:"


class ExecutionSettings(BaseModel):
    """Per-request generation settings passed to the completion provider."""

    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    system_prompt: str | None = None


class LLMSettings(BaseSettings):
    """Chat completion settings.

    Nested execution settings can be set from the environment with a double
    underscore, e.g. ``BOT_MANAGER_LLM_EXECUTION__TEMPERATURE=0.2``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOT_MANAGER_LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    provider: Literal["openai", "anthropic"] = "openai"
    api_key: SecretStr | None = None
    model_id: str = "gpt-4o-mini"
    endpoint: str | None = None
    request_timeout: float | None = 60.0
    max_retries: int = 3
    retry_backoff_base: float = 2.0
    execution: ExecutionSettings = ExecutionSettings()

    @property
    def has_api_key(self) -> bool:
        """Check if a non-blank API key is configured."""
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())


class LoggingSettings(BaseSettings):
    """Logging output settings."""

    model_config = SettingsConfigDict(
        env_prefix="BOT_MANAGER_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False


class BotManagerConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = BotManagerConfig()
        if config.redis_enabled:
            ...
    """

    model_config = SettingsConfigDict(
        env_prefix="BOT_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Component settings (nested)
    mongo: MongoSettings = MongoSettings()
    redis: RedisSettings = RedisSettings()
    llm: LLMSettings = LLMSettings()
    logging: LoggingSettings = LoggingSettings()

    storage_backend: Literal["memory", "mongo"] = "memory"

    # Read-through cache expiration for single bot lookups
    cache_ttl_seconds: int = 600

    @property
    def redis_enabled(self) -> bool:
        """Check if Redis caching is enabled and configured."""
        return self.redis.enabled and self.redis.url is not None
