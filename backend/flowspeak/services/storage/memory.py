"""In-process storage provider (tests and ephemeral runs)."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Optional

from flowspeak.services.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
        logger.debug("Stored %s (%s bytes) in memory", key, len(value))

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
