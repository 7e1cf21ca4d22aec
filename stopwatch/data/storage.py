from __future__ import annotations

"""SQLite persistence of the single stopwatch state snapshot."""

import json
import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator


logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
STATE_KEY = "stopwatchState"
SETTINGS_DDL = """
CREATE TABLE IF NOT EXISTS settings(
    key TEXT PRIMARY KEY,
    value TEXT
)
"""


class PersistenceError(Exception):
    pass


def _require_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PersistenceError(f"Field {key!r} must be an integer, got {value!r}")
    if value < 0:
        raise PersistenceError(f"Field {key!r} must not be negative")
    return value


@dataclass(frozen=True)
class PersistedSnapshot:
    running: bool
    elapsed_ms: int
    laps: tuple[int, ...] = ()
    last_lap_mark_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "running": self.running,
            "elapsedMs": self.elapsed_ms,
            "laps": list(self.laps),
            "lastLapMarkMs": self.last_lap_mark_ms,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> PersistedSnapshot:
        if not isinstance(payload, dict):
            raise PersistenceError("Snapshot must be a JSON object")
        running = payload.get("running")
        if not isinstance(running, bool):
            raise PersistenceError(f"Field 'running' must be a boolean, got {running!r}")
        elapsed_ms = _require_int(payload.get("elapsedMs"), "elapsedMs")
        last_lap_mark_ms = _require_int(payload.get("lastLapMarkMs"), "lastLapMarkMs")
        raw_laps = payload.get("laps")
        if not isinstance(raw_laps, list):
            raise PersistenceError("Field 'laps' must be a list")
        laps = tuple(_require_int(lap, "laps") for lap in raw_laps)
        if last_lap_mark_ms > elapsed_ms:
            raise PersistenceError("lastLapMarkMs is ahead of elapsedMs")
        if sum(laps) != last_lap_mark_ms:
            raise PersistenceError("Lap durations do not add up to lastLapMarkMs")
        return cls(running=running, elapsed_ms=elapsed_ms, laps=laps, last_lap_mark_ms=last_lap_mark_ms)


class StateStore:
    """Keeps the snapshot as JSON under one key of a settings table."""

    def __init__(self, db_path: str | Path, key: str = STATE_KEY) -> None:
        self.db_path = Path(db_path)
        self.key = key
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Cannot create directory for %s: %s", self.db_path, exc)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute(SETTINGS_DDL)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._transaction() as conn:
                conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
                row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
                if not row:
                    conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Cannot initialise {self.db_path}: {exc}") from exc

    def save(self, snapshot: PersistedSnapshot) -> None:
        # same checks as restore(), so nothing unreadable gets written
        payload = PersistedSnapshot.from_dict(snapshot.to_dict()).to_dict()
        raw = json.dumps(payload)
        try:
            with self._transaction() as conn:
                conn.execute(
                    "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (self.key, raw),
                )
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot save snapshot: {exc}") from exc
        logger.debug("Saved snapshot %s", raw)

    def restore(self) -> PersistedSnapshot | None:
        """Returns `None` when nothing was saved yet."""
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM settings WHERE key = ?", (self.key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot read snapshot: {exc}") from exc
        if not row or row["value"] is None:
            return None
        try:
            payload = json.loads(row["value"])
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Stored snapshot is not valid JSON: {exc}") from exc
        return PersistedSnapshot.from_dict(payload)

    def clear(self) -> None:
        try:
            with self._transaction() as conn:
                conn.execute("DELETE FROM settings WHERE key = ?", (self.key,))
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot clear snapshot: {exc}") from exc
