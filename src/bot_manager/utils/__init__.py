"""Utility functions for bot_manager.

This module contains internal utility functions.
"""

from bot_manager.utils.ids import epoch_now, new_bot_id
from bot_manager.utils.lazy_import import lazy_import

__all__ = [
    "epoch_now",
    "lazy_import",
    "new_bot_id",
]
