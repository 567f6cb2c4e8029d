"""Identifier and timestamp helpers for bot_manager."""

import time
import uuid

__all__ = [
    "new_bot_id",
    "epoch_now",
]


def new_bot_id() -> str:
    """Generate a new opaque bot identifier."""
    return str(uuid.uuid4())


def epoch_now() -> int:
    """Current time in whole epoch seconds."""
    return int(time.time())
