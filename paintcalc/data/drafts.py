"""SQLite-backed key-value store for in-progress job drafts.

One row per draft key. Payloads are the job dataclasses serialised to JSON
with pydantic. Failures are logged and treated as "no draft" so a broken
store never blocks estimating.
"""

import logging
import sqlite3
import threading
import time
from pathlib import Path
from typing import Optional, TypeVar

from pydantic import ValidationError

from paintcalc.config import settings
from paintcalc.models.draft import StoredDraft
from paintcalc.models.exterior import ExteriorJobInput

logger = logging.getLogger(__name__)

JobT = TypeVar("JobT")


def _now_ms() -> int:
    return int(time.time() * 1000)


class DraftStore:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.draft_db_path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS drafts (
                    draft_key TEXT PRIMARY KEY,
                    data_json TEXT,
                    saved_at INTEGER
                );
            """)

    def save_now(self, key: str, job) -> Optional[int]:
        """Write a draft immediately. Returns the saved_at timestamp, or None on failure."""
        draft = StoredDraft[type(job)](data=job, saved_at=_now_ms())
        try:
            payload = draft.model_dump_json(warnings=False)
            with self._connect() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO drafts (draft_key, data_json, saved_at) "
                    "VALUES (?, ?, ?)",
                    (key, payload, draft.saved_at),
                )
        except sqlite3.Error as e:
            logger.warning("Failed to save draft %s: %s", key, e)
            return None
        logger.debug("Saved draft %s at %d", key, draft.saved_at)
        return draft.saved_at

    def load(self, key: str, job_type: type[JobT]) -> Optional[StoredDraft[JobT]]:
        """Return the stored draft, or None if missing or unreadable."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT data_json FROM drafts WHERE draft_key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.warning("Failed to load draft %s: %s", key, e)
            return None
        if not row:
            return None

        try:
            return StoredDraft[job_type].model_validate_json(row["data_json"])
        except ValidationError as e:
            logger.warning("Discarding unreadable draft %s: %s", key, e)
            return None

    def clear(self, key: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM drafts WHERE draft_key = ?", (key,))
        except sqlite3.Error as e:
            logger.warning("Failed to clear draft %s: %s", key, e)
            return
        logger.debug("Cleared draft %s", key)

    def has_draft(self, key: str, job_type: type) -> bool:
        return self.load(key, job_type) is not None

    def last_saved(self, key: str) -> Optional[int]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT saved_at FROM drafts WHERE draft_key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.warning("Failed to read draft timestamp %s: %s", key, e)
            return None
        return row["saved_at"] if row else None


class DebouncedDraftWriter:
    """Coalesce rapid saves: only the last job within the debounce window is written."""

    def __init__(self, store: DraftStore, key: str, debounce_ms: Optional[int] = None):
        self.store = store
        self.key = key
        self.debounce_ms = settings.draft_debounce_ms if debounce_ms is None else debounce_ms
        self.last_saved: Optional[int] = None
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending = None
        # Bumped whenever a scheduled write is superseded; stale timers skip
        self._generation = 0

    def save(self, job) -> None:
        """Schedule a write after the debounce delay, replacing any pending one."""
        with self._lock:
            self._cancel_timer()
            self._pending = job
            self._timer = threading.Timer(
                self.debounce_ms / 1000, self._on_timer, args=(self._generation,)
            )
            self._timer.daemon = True
            self._timer.start()

    def save_now(self, job) -> None:
        with self._lock:
            self._cancel_timer()
            self._pending = None
        self._write(job)

    def flush(self) -> None:
        """Write the pending job now, if there is one."""
        with self._lock:
            self._cancel_timer()
            job, self._pending = self._pending, None
        if job is not None:
            self._write(job)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._pending = None

    def clear(self) -> None:
        self.cancel()
        self.store.clear(self.key)
        self.last_saved = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            job, self._pending = self._pending, None
        if job is not None:
            self._write(job)

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _write(self, job) -> None:
        saved_at = self.store.save_now(self.key, job)
        if saved_at is not None:
            self.last_saved = saved_at


def has_meaningful_exterior_draft(draft: Optional[StoredDraft[ExteriorJobInput]]) -> bool:
    """Only offer recovery for drafts with real data entered."""
    if draft is None:
        return False
    return draft.data.house_sqft > 0 or draft.data.shutter_count > 0
