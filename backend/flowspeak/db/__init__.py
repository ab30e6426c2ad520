"""Database utilities and models."""

from flowspeak.db.base import Base
from flowspeak.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
