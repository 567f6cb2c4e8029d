"""FastAPI application for the bot_manager REST API.

Provides the application factory with routers and exception handlers
configured. Error responses never carry internal exception details.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bot_manager import __version__
from bot_manager.api.middleware import GENERIC_ERROR_MESSAGE, request_context
from bot_manager.api.routes import bots, completions
from bot_manager.errors import CompletionError, InvalidInputError, ValidationFailedError
from bot_manager.logging import get_logger
from bot_manager.orchestrator import BotManager

__all__ = ["create_app", "GENERIC_ERROR_MESSAGE"]

logger = get_logger(__name__)


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    """Map bot validation failures (including name collisions) to 400."""
    return JSONResponse(
        status_code=400,
        content={"message": "Validation failed.", "errors": exc.errors},
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Map prompt/history validation failures to 400."""
    return JSONResponse(status_code=400, content={"message": str(exc), "errors": [str(exc)]})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request.", "errors": errors},
    )


async def completion_error_handler(request: Request, exc: CompletionError) -> JSONResponse:
    """Hide provider failures behind a generic 500."""
    logger.error(
        "completion_request_failed",
        path=request.url.path,
        error_kind=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})


def create_app(manager: BotManager | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        manager: BotManager to serve; built from settings when omitted.
            It is opened and closed by the application lifespan.

    Returns:
        Configured FastAPI instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        bot_manager = manager or BotManager.from_config()
        async with bot_manager:
            app.state.manager = bot_manager
            logger.info("api_started", completions=bot_manager.has_completions)
            yield
        logger.info("api_stopped")

    app = FastAPI(
        title="Bot Manager API",
        description="Manage bots and request chat completions",
        version=__version__,
        lifespan=lifespan,
    )

    app.middleware("http")(request_context)

    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CompletionError, completion_error_handler)

    app.include_router(bots.router)
    app.include_router(completions.router)

    @app.get("/health")
    async def health_check() -> dict:
        """Liveness check."""
        return {"status": "ok", "version": __version__}

    return app
