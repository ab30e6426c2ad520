"""Storage provider factory."""
from __future__ import annotations

import logging
from functools import lru_cache

from flowspeak.core.config import settings
from flowspeak.services.storage.base import KeyValueStorage
from flowspeak.services.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


@lru_cache
def get_storage() -> KeyValueStorage:
    provider = settings.storage_provider.lower()
    if provider == "memory":
        return MemoryStorage()
    if provider != "sql":
        logger.warning("Unknown storage provider %r; falling back to sql", provider)

    from flowspeak.db.session import SessionLocal
    from flowspeak.services.storage.sql import SqlStorage

    return SqlStorage(SessionLocal)
