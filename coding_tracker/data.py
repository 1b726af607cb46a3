"""
SQLite storage for coding sessions.

``SessionRepository`` owns the ``sessions`` table: it records new
sessions, changes their start or end time, removes them and lists them
for display.  Each call works on a short-lived connection, and any
``sqlite3.Error`` surfaces as ``StorageError``.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Callable, Iterator, List, Optional, Sequence

from coding_tracker.config import DB_FILE
from coding_tracker.errors import StorageError
from coding_tracker.models import STORAGE_FORMAT, CodingSession
from coding_tracker.utils import session_duration

logger = logging.getLogger(__name__)

# --- Database Schema ---
# Table: sessions
# Columns:
#   id             integer primary key autoincrement
#   start_time     text         -- timestamp when the session starts
#   end_time       text         -- timestamp when the session ends
#   duration_sec   real         -- end_time - start_time in seconds
SCHEMA = """
CREATE TABLE IF NOT EXISTS sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    start_time TEXT NOT NULL,
    end_time TEXT NOT NULL,
    duration_sec REAL NOT NULL
);
"""


class SessionRepository:
    """
    Persist and retrieve ``CodingSession`` records.

    ``display`` receives a list of sessions whenever ``show_all`` or
    ``show_ordered`` is called; the console shell passes its table renderer.
    """

    def __init__(
        self,
        db_file: str = DB_FILE,
        display: Optional[Callable[[List[CodingSession]], None]] = None,
    ) -> None:
        self.db_file = db_file
        self.display = display
        self.init_db()

    @contextmanager
    def get_conn(self) -> Iterator[sqlite3.Connection]:
        """Yield a committed-on-success connection, translating SQLite errors."""
        try:
            conn = sqlite3.connect(self.db_file)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self.db_file}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise StorageError(f"Database operation failed: {exc}") from exc
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialise the database schema if it does not already exist."""
        with self.get_conn() as conn:
            conn.execute(SCHEMA)

    # --- Writes ---
    def create(self, start_time: datetime, end_time: datetime, duration: timedelta) -> int:
        """
        Insert a new session record and return its id.

        :param start_time: A ``datetime`` marking the start of the session.
        :param end_time: A ``datetime`` marking the end of the session.
        :param duration: Elapsed time of the session.
        :return: The primary key of the inserted session.
        """
        with self.get_conn() as conn:
            cur = conn.execute(
                "INSERT INTO sessions (start_time, end_time, duration_sec) VALUES (?, ?, ?)",
                (
                    start_time.strftime(STORAGE_FORMAT),
                    end_time.strftime(STORAGE_FORMAT),
                    duration.total_seconds(),
                ),
            )
            session_id = cur.lastrowid
        logger.debug("Inserted session %s (%s -> %s)", session_id, start_time, end_time)
        return session_id

    def update_start_time(self, session_id: int, start_time: datetime) -> None:
        """Change the start time of a session and refresh its stored duration."""
        self._update_timestamp(session_id, "start_time", start_time)

    def update_end_time(self, session_id: int, end_time: datetime) -> None:
        """Change the end time of a session and refresh its stored duration."""
        self._update_timestamp(session_id, "end_time", end_time)

    def _update_timestamp(self, session_id: int, column: str, value: datetime) -> None:
        if column not in ("start_time", "end_time"):
            raise ValueError(f"Invalid column: {column}")
        with self.get_conn() as conn:
            row = conn.execute(
                "SELECT id, start_time, end_time, duration_sec FROM sessions WHERE id = ?",
                (session_id,),
            ).fetchone()
            if row is None:
                logger.debug("Session %s not found, %s left unchanged", session_id, column)
                return
            session = CodingSession.from_row(dict(row))
            setattr(session, column, value)
            duration = session_duration(session.start_time, session.end_time)
            conn.execute(
                f"UPDATE sessions SET {column} = ?, duration_sec = ? WHERE id = ?",
                (value.strftime(STORAGE_FORMAT), duration.total_seconds(), session_id),
            )
        logger.debug("Updated %s of session %s to %s", column, session_id, value)

    def delete(self, session_id: int) -> None:
        """Remove a session record entirely; unknown ids are ignored."""
        with self.get_conn() as conn:
            cur = conn.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
        logger.debug("Delete of session %s removed %d row(s)", session_id, cur.rowcount)

    # --- Reads ---
    def get_all(self) -> List[CodingSession]:
        """Return every stored session in insertion order."""
        with self.get_conn() as conn:
            rows = conn.execute(
                "SELECT id, start_time, end_time, duration_sec FROM sessions ORDER BY id"
            ).fetchall()
        return [CodingSession.from_row(dict(row)) for row in rows]

    def show_all(self) -> None:
        """Hand every stored session to the display callback."""
        self.show_ordered(self.get_all())

    def show_ordered(self, sessions: Sequence[CodingSession]) -> None:
        """Hand an explicitly ordered sequence of sessions to the display callback."""
        if self.display is not None:
            self.display(list(sessions))
