"""
Storage backends for taskstreak

- memory: in-process, default
- postgres: psycopg connection pool
"""

import logging
from typing import Optional

from taskstreak import config
from taskstreak.exceptions import ConfigurationError
from taskstreak.store.base import TrackerStore
from taskstreak.store.memory import MemoryStore

logger = logging.getLogger(__name__)


def create_store(backend: Optional[str] = None, database_url: Optional[str] = None) -> TrackerStore:
    """
    Build a store for the configured backend

    Args:
        backend: 'memory' or 'postgres' (defaults to config.STORAGE_BACKEND)
        database_url: Connection string for postgres (defaults to config.DATABASE_URL)

    Raises:
        ConfigurationError: Unknown backend
    """
    backend = (backend or config.STORAGE_BACKEND).lower()

    if backend == "memory":
        logger.info("Using in-memory store")
        return MemoryStore()

    if backend == "postgres":
        from taskstreak.db.connection import Database
        from taskstreak.store.postgres import PostgresStore

        logger.info("Using postgres store")
        return PostgresStore(Database(database_url or config.DATABASE_URL))

    raise ConfigurationError(
        message=f"Unknown storage backend: {backend}",
        config_key="STORAGE_BACKEND"
    )


__all__ = ["TrackerStore", "MemoryStore", "create_store"]
