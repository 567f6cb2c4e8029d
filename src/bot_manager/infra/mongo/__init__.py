"""MongoDB infrastructure for bot_manager."""

from bot_manager.infra.mongo.client import MongoClient
from bot_manager.infra.mongo.repositories import MongoBotRepository

__all__ = ["MongoClient", "MongoBotRepository"]
