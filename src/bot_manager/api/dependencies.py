"""FastAPI dependencies resolving services from the running BotManager."""

from fastapi import HTTPException, Request

from bot_manager.orchestrator import BotManager
from bot_manager.services.bot_service import BotService
from bot_manager.services.completion_gateway import ChatCompletionGateway

__all__ = [
    "get_manager",
    "get_bot_service",
    "get_gateway",
]


def get_manager(request: Request) -> BotManager:
    """Get the BotManager opened by the application lifespan."""
    return request.app.state.manager


def get_bot_service(request: Request) -> BotService:
    return get_manager(request).bots


def get_gateway(request: Request) -> ChatCompletionGateway:
    """Get the completion gateway.

    Raises:
        HTTPException: 503 if no completion provider is configured
    """
    manager = get_manager(request)
    if not manager.has_completions:
        raise HTTPException(status_code=503, detail="Completion provider is not configured.")
    return manager.completions
