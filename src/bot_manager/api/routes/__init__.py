"""API routers for bot_manager."""

from bot_manager.api.routes import bots, completions

__all__ = ["bots", "completions"]
