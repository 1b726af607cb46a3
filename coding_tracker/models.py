"""Domain model for recorded coding sessions."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

# Storage format for timestamps in the sessions table; microseconds are kept
# so the stored duration always equals end_time - start_time.
STORAGE_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

# Identifier typed by the user to back out of a selection.
CANCEL_ID = 0

PERIODS = ("days", "hours", "minutes")


@dataclass
class CodingSession:
    """One recorded interval of coding activity."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[timedelta] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CodingSession":
        """Build a session from a ``sessions`` table row mapping.

        Rows written without fractional seconds are read as well.
        """
        return cls(
            id=row["id"],
            start_time=datetime.fromisoformat(row["start_time"]),
            end_time=datetime.fromisoformat(row["end_time"]),
            duration=timedelta(seconds=float(row["duration_sec"] or 0.0)),
        )
