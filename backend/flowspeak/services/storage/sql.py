"""SQLAlchemy-backed storage provider over the kv_entries table."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from flowspeak.db.models.kv_entry import KeyValueEntry
from flowspeak.services.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class SqlStorage(KeyValueStorage):
    """
    Store each key as one row.

    Every call opens its own session from the factory and commits before
    returning, so a write either lands completely or not at all.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            try:
                entry = db.get(KeyValueEntry, key)
                if entry is None:
                    db.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                db.commit()
            except Exception:
                db.rollback()
                raise
        logger.debug("Persisted %s (%s bytes)", key, len(value))

    def delete(self, key: str) -> None:
        with self._session_factory() as db:
            try:
                db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
                db.commit()
            except Exception:
                db.rollback()
                raise
