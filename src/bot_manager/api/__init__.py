"""REST API adapter for bot_manager."""

from bot_manager.api.app import create_app

__all__ = ["create_app"]
