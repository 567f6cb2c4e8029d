"""Public DTO models for bot_manager.

This module exports all public data transfer objects.
"""

from bot_manager.models.bot import BotDTO, BotIntegrationDTO, BotStatistics, IntegrationType
from bot_manager.models.chat import ChatHistory, ChatMessage, ChatRole

__all__ = [
    "BotDTO",
    "BotIntegrationDTO",
    "BotStatistics",
    "ChatHistory",
    "ChatMessage",
    "ChatRole",
    "IntegrationType",
]
