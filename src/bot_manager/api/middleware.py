"""HTTP middleware for the bot_manager REST API."""

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from bot_manager.logging import bind_request_context, clear_request_context, get_logger

__all__ = ["GENERIC_ERROR_MESSAGE", "REQUEST_ID_HEADER", "request_context"]

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag log events with a request id and log one line per request.

    An incoming X-Request-ID is reused so ids can be followed across
    services; otherwise a new one is generated. The id is echoed back
    on the response, including the generic 500 returned when a route
    fails unexpectedly.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    clear_request_context()
    bind_request_context(request_id=request_id)

    started = time.perf_counter()
    try:
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed_unexpectedly",
                path=request.url.path,
                error=str(e),
                exc_info=e,
            )
            response = JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
    finally:
        clear_request_context()
