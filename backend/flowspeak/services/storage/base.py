"""Key-value storage interface for the persisted progress blob."""
from __future__ import annotations

from typing import Optional


class KeyValueStorage:
    """Base interface for storage providers. Values are opaque strings."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
