"""Single source of truth for the user's progress snapshot."""
from __future__ import annotations

import json
import logging
import time
from threading import Lock
from typing import Any, Callable, List, Optional, Tuple

from flowspeak.api.schemas.progress import TOTAL_DAYS, UserProgress, default_progress
from flowspeak.core.errors import LoadFailure, SaveFailure
from flowspeak.observability.metrics import timed_operation
from flowspeak.services.progress_events import migrate_progress
from flowspeak.services.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

DAY_MS = 86_400_000
DEFAULT_STORAGE_KEY = "@flowspeak_progress"

Mutation = Callable[..., UserProgress]


def _now_ms() -> int:
    return int(time.time() * 1000)


def calendar_day_index(epoch_ms: int) -> int:
    """Whole days since the epoch (UTC)."""
    return epoch_ms // DAY_MS


class ProgressStore:
    """
    Holds the progress aggregate and persists it through a key-value storage.

    Mutations are serialized by a lock and follow write-then-publish: the new
    snapshot becomes visible only after the storage write returns. A failed
    write raises `SaveFailure` and leaves the previous snapshot in place.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        now: Callable[[], int] = _now_ms,
    ):
        self._storage = storage
        self._storage_key = storage_key
        self._now = now
        self._lock = Lock()
        self._progress: UserProgress = default_progress(now())
        self._revision = 0
        self._loaded = False
        self._advanced_since_load = False
        self._checked_day: Optional[int] = None
        self._reset_listeners: List[Callable[[], None]] = []

        self.is_loading = False
        self.is_saving = False
        self.load_error: Optional[str] = None
        self.save_error: Optional[str] = None

    # -- read side ---------------------------------------------------------

    @property
    def progress(self) -> UserProgress:
        return self._progress

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def loaded(self) -> bool:
        return self._loaded

    def now(self) -> int:
        return self._now()

    def add_reset_listener(self, listener: Callable[[], None]) -> None:
        self._reset_listeners.append(listener)

    # -- lifecycle -----------------------------------------------------------

    def load(self) -> UserProgress:
        """
        Read, migrate and publish the stored aggregate, then auto-advance.

        A missing key yields (and persists) the default aggregate. Unreadable
        or corrupt data raises `LoadFailure`; the in-memory snapshot keeps its
        last known value.
        """
        with self._lock:
            self.is_loading = True
            self.load_error = None
            try:
                raw = self._read_with_retry()
                now_ms = self._now()
                if raw is None:
                    logger.info("No stored progress under %s; starting fresh", self._storage_key)
                    self._persist_quietly(default_progress(now_ms))
                else:
                    progress, migrated = self._parse(raw, now_ms)
                    self._publish(progress)
                    if migrated:
                        self._persist_quietly(progress)
                self._loaded = True
                self._advanced_since_load = False
                self._auto_advance_locked()
                return self._progress
            except LoadFailure as exc:
                self.load_error = str(exc)
                logger.error("Loading progress failed: %s", exc)
                raise
            finally:
                self.is_loading = False

    def _read_with_retry(self) -> Optional[str]:
        try:
            return self._storage.get(self._storage_key)
        except Exception as first:
            logger.warning("Reading %s failed (%s); retrying once", self._storage_key, first)
        try:
            return self._storage.get(self._storage_key)
        except Exception as exc:
            raise LoadFailure(f"Could not read stored progress: {exc}") from exc

    def _parse(self, raw: str, now_ms: int) -> Tuple[UserProgress, bool]:
        try:
            data: Any = json.loads(raw)
            return migrate_progress(data, now_ms=now_ms)
        except ValueError as exc:
            raise LoadFailure(f"Stored progress is corrupt: {exc}") from exc

    def auto_advance(self) -> UserProgress:
        """
        Move the current day forward by the calendar days elapsed since last activity.

        Runs at most once per load and again only after the calendar date
        changes, so a long-running process follows the clock like a relaunch.
        """
        with self._lock:
            if calendar_day_index(self._now()) != self._checked_day:
                self._advanced_since_load = False
            self._auto_advance_locked()
            return self._progress

    def _auto_advance_locked(self) -> None:
        if self._advanced_since_load:
            return
        self._advanced_since_load = True

        now_ms = self._now()
        self._checked_day = calendar_day_index(now_ms)
        current = self._progress
        elapsed_days = calendar_day_index(now_ms) - calendar_day_index(current.last_active_date)
        if elapsed_days <= 0:
            return

        target_day = min(current.current_day + elapsed_days, TOTAL_DAYS)
        advanced = current.model_copy(update={"current_day": target_day, "last_active_date": now_ms})
        logger.info(
            "Auto-advancing from day %s to day %s (%s calendar days elapsed)",
            current.current_day,
            target_day,
            elapsed_days,
        )
        self._persist_quietly(advanced)

    # -- write side ----------------------------------------------------------

    def save(self, progress: UserProgress) -> UserProgress:
        with self._lock:
            self._persist(progress)
            self._publish(progress)
            return progress

    def apply(self, mutation: Mutation, *args: Any, **kwargs: Any) -> UserProgress:
        """
        Run a pure mutation against the current snapshot and persist the result.

        A mutation that returns its input unchanged is a no-op and nothing is
        written.
        """
        with self._lock:
            current = self._progress
            updated = mutation(current, *args, now_ms=self._now(), **kwargs)
            if updated is current:
                return current
            self._persist(updated)
            self._publish(updated)
            return updated

    def reset(self) -> UserProgress:
        """
        Replace the stored blob with a fresh default aggregate.

        The overwrite is a single write, so a failure raises `SaveFailure` with
        both the stored blob and the snapshot untouched.
        """
        with self._lock:
            now_ms = self._now()
            fresh = default_progress(now_ms)
            self._persist(fresh)
            self._publish(fresh)
            self._advanced_since_load = True
            self._checked_day = calendar_day_index(now_ms)
            listeners = list(self._reset_listeners)

        logger.info("Progress reset to defaults")
        for listener in listeners:
            listener()
        return fresh

    def _persist(self, progress: UserProgress) -> None:
        payload = json.dumps(progress.model_dump(mode="json", by_alias=True))
        self.is_saving = True
        try:
            with timed_operation("progress.save", {"current_day": progress.current_day}):
                self._storage.set(self._storage_key, payload)
        except Exception as exc:
            self.save_error = str(exc)
            logger.error("Saving progress failed: %s", exc)
            raise SaveFailure(f"Could not save progress: {exc}") from exc
        finally:
            self.is_saving = False
        self.save_error = None

    def _persist_quietly(self, progress: UserProgress) -> None:
        """Persist then publish; on failure keep the current snapshot without raising."""
        try:
            self._persist(progress)
        except SaveFailure:
            if not self._loaded and self._progress is not progress:
                # Nothing better to show yet; keep the value in memory only.
                self._publish(progress)
            return
        self._publish(progress)

    def _publish(self, progress: UserProgress) -> None:
        self._progress = progress
        self._revision += 1
