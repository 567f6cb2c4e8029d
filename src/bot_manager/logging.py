"""Structured logging for bot_manager.

structlog renders either JSON lines (production) or colored console
output (development). Values bound with :func:`bind_request_context`
are attached to every event logged while handling the current request.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from bot_manager.config import LoggingSettings

__all__ = [
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]

# Client libraries that log every HTTP round trip at INFO
_QUIET_LIBRARIES = ("httpx", "httpcore", "openai", "anthropic", "motor", "pymongo")

_configured = False


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _processors(json_output: bool, add_timestamp: bool) -> list[Any]:
    chain: list[Any] = [structlog.processors.TimeStamper(fmt="iso")] if add_timestamp else []
    chain += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        chain.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return chain


def configure_logging(
    level: int | str = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; the last call wins.

    Args:
        level: Logging level, numeric or by name (default: INFO)
        json_output: If True, output JSON; if False, pretty console output
        add_timestamp: If True, add ISO timestamp to log entries
    """
    global _configured

    structlog.configure(
        processors=_processors(json_output, add_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=_resolve_level(level), force=True
    )

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def configure_from_settings(settings: "LoggingSettings") -> None:
    """Configure logging from ``BOT_MANAGER_LOG_*`` settings."""
    configure_logging(level=settings.level, json_output=settings.json_output)


def bind_request_context(**values: Any) -> None:
    """Attach values (e.g. request_id) to all events in the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)


if not _configured:
    configure_logging()
