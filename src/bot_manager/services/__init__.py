"""Services for bot_manager.

This module exports the bot lifecycle service, the completion gateway
and the validation helpers they rely on.
"""

from bot_manager.services.bot_service import BotService
from bot_manager.services.bot_validation import validate_bot
from bot_manager.services.completion_gateway import ChatCompletionGateway
from bot_manager.services.prompt_validation import validate_history, validate_prompt

__all__ = [
    "BotService",
    "ChatCompletionGateway",
    "validate_bot",
    "validate_history",
    "validate_prompt",
]
