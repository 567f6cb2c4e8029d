"""Interface contracts for bot_manager.

This module exports all Protocol-based interfaces for dependency injection.
"""

from bot_manager.interfaces.cache import CacheInterface
from bot_manager.interfaces.completion import CompletionProviderInterface, CompletionRequest
from bot_manager.interfaces.storage import BotPredicate, BotRepositoryInterface

__all__ = [
    "BotPredicate",
    "BotRepositoryInterface",
    "CacheInterface",
    "CompletionProviderInterface",
    "CompletionRequest",
]
