"""MongoDB client and collection factory.

The client is created once per process and shared by every request;
``pymongo.MongoClient`` is thread-safe and manages its own pool.
"""

from __future__ import annotations

from functools import lru_cache

import structlog
from pymongo import MongoClient
from pymongo.collection import Collection

from config import settings

logger = structlog.get_logger(__name__)


@lru_cache
def get_client() -> MongoClient:
    """Return the process-wide MongoDB client."""
    logger.info("mongo.client_created", uri=settings.MONGO_URI)
    return MongoClient(settings.MONGO_URI)


def get_collection(client: MongoClient | None = None) -> Collection:
    """Return the products collection from the configured database."""
    client = client or get_client()
    return client[settings.MONGO_DATABASE][settings.MONGO_COLLECTION]
