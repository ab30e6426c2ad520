"""ORM models exposed for metadata discovery."""
from flowspeak.db.models.kv_entry import KeyValueEntry

__all__ = ["KeyValueEntry"]
