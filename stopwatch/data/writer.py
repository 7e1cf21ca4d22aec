from __future__ import annotations

import logging
import threading

from stopwatch.data.storage import PersistedSnapshot, PersistenceError, StateStore


logger = logging.getLogger(__name__)


class SnapshotWriter:
    """Serializes snapshot writes on one background thread.

    Only the newest pending snapshot is kept: a submission made while a write
    is in flight replaces any older one still waiting, so the last request is
    the one that ends up on disk.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store
        self._cond = threading.Condition()
        self._pending: PersistedSnapshot | None = None
        self._busy = False
        self._closed = False
        self.last_error: Exception | None = None
        self._thread = threading.Thread(target=self._run, name="snapshot-writer", daemon=True)
        self._thread.start()

    def submit(self, snapshot: PersistedSnapshot) -> None:
        with self._cond:
            if self._closed:
                raise RuntimeError("SnapshotWriter is closed")
            if self._pending is not None:
                logger.debug("Dropping superseded snapshot")
            self._pending = snapshot
            self._cond.notify_all()

    def flush(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._pending is None and not self._busy, timeout)

    def close(self) -> None:
        with self._cond:
            if self._closed:
                return
            self._cond.wait_for(lambda: self._pending is None and not self._busy)
            self._closed = True
            self._cond.notify_all()
        self._thread.join()

    def _run(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._pending is not None or self._closed)
                if self._pending is None:
                    return
                snapshot = self._pending
                self._pending = None
                self._busy = True
            error: Exception | None = None
            try:
                self._store.save(snapshot)
            except PersistenceError as exc:
                logger.error("Snapshot write failed: %s", exc)
                error = exc
            except Exception as exc:
                logger.exception("Unexpected error while writing snapshot")
                error = exc
            finally:
                with self._cond:
                    self.last_error = error
                    self._busy = False
                    self._cond.notify_all()
