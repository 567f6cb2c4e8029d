"""Test doubles for bot_manager."""
