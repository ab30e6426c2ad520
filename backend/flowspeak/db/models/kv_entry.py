"""Key-value blob ORM model backing the SQL storage provider."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from flowspeak.db.base import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
