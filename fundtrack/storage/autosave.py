"""Mini README: Debounced, fire-and-forget persistence of the record store.

Structure:
    * DebouncedAutosave - store listener that restarts a timer on every change.

Each mutation cancels the pending timer and schedules a new one, so a burst
of edits produces one write containing the latest state (last write wins).
``flush`` writes immediately and ``close`` flushes anything still pending.
Write failures are logged and the saver keeps accepting changes.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

from ..logging_utils import get_logger
from ..records.store import RecordStore
from .json_repository import JsonLedgerRepository

LOGGER = get_logger(__name__)


class DebouncedAutosave:
    """Persist ``store`` to ``repository`` after ``delay`` seconds of quiet."""

    def __init__(
        self,
        store: RecordStore,
        repository: JsonLedgerRepository,
        *,
        delay: float = 1.0,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ) -> None:
        if delay < 0:
            raise ValueError("Autosave delay cannot be negative.")
        self.store = store
        self.repository = repository
        self.delay = delay
        self.last_saved_at: Optional[datetime] = None
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._unsubscribe = store.subscribe(self._on_change)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def _on_change(self, _store: RecordStore) -> None:
        self.schedule()

    def schedule(self) -> None:
        """Restart the quiet-period timer."""

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(self.delay, self._fire)
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        self._write()

    def _write(self) -> bool:
        try:
            self.repository.save_snapshot(self.store.snapshot())
        except OSError as error:
            LOGGER.warning("Autosave to %s failed: %s", self.repository.directory, error)
            return False
        self.last_saved_at = datetime.now()
        LOGGER.debug("Autosaved ledger at %s", self.last_saved_at.strftime("%I:%M:%S %p"))
        return True

    def flush(self) -> bool:
        """Cancel any pending timer and write the current state now."""

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        return self._write()

    def close(self) -> None:
        """Stop listening and persist anything still pending."""

        self._unsubscribe()
        if self.pending:
            self.flush()
