"""In-process infrastructure for bot_manager."""

from bot_manager.infra.memory.repository import InMemoryBotRepository

__all__ = ["InMemoryBotRepository"]
