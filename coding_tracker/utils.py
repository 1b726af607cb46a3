"""
Validation and time helpers for the coding tracker.

Every function here is pure: it either returns a clean value or raises
``InputError`` describing what was wrong with the text.  Re-prompting on
failure is the job of ``coding_tracker.prompts``.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from coding_tracker.config import TIME_FORMAT
from coding_tracker.errors import InputError
from coding_tracker.models import CANCEL_ID, PERIODS, CodingSession

IDENTIFIER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_timestamp(text: str, time_format: str = TIME_FORMAT) -> datetime:
    """
    Parse a user supplied timestamp.

    :param text: Raw text as typed by the user.
    :param time_format: ``strptime`` format the text must follow.
    :return: The parsed ``datetime``.
    :raises InputError: If the text is empty or does not match the format.
    """
    value = (text or "").strip()
    if not value:
        raise InputError("A date and time is required.")
    try:
        return datetime.strptime(value, time_format)
    except ValueError as exc:
        example = datetime(2024, 1, 31, 9, 30).strftime(time_format)
        raise InputError(f"Invalid date/time '{value}'. Expected format like {example}.") from exc


def _not_in_future(moment: datetime, now: datetime, label: str) -> datetime:
    if moment > now:
        raise InputError(f"The {label} time cannot be in the future.")
    return moment


def validate_start_time(
    text: str,
    time_format: str = TIME_FORMAT,
    now: Callable[[], datetime] = datetime.now,
) -> datetime:
    """Parse a start timestamp that must not lie in the future."""
    return _not_in_future(parse_timestamp(text, time_format), now(), "start")


def validate_end_time(
    text: str,
    time_format: str = TIME_FORMAT,
    now: Callable[[], datetime] = datetime.now,
) -> datetime:
    """Parse an end timestamp that must not lie in the future."""
    return _not_in_future(parse_timestamp(text, time_format), now(), "end")


def validate_time_pair(start: datetime, end: datetime) -> List[datetime]:
    """Return ``[start, end]`` when the end comes strictly after the start."""
    if end <= start:
        raise InputError("The end time must be later than the start time.")
    return [start, end]


def session_duration(start: datetime, end: datetime) -> timedelta:
    """Elapsed time between ``start`` and ``end``."""
    return end - start


def parse_identifier(text: str) -> int:
    """
    Parse a session identifier typed by the user.

    Only an optional sign followed by ASCII digits is accepted, so ``1_0``
    or non-Latin digits are rejected.  ``0`` means "go back"; callers check
    for ``CANCEL_ID``.
    """
    value = (text or "").strip()
    if not IDENTIFIER_PATTERN.fullmatch(value):
        raise InputError("Invalid input. Please enter a valid integer that is >= 0.")
    number = int(value)
    if number < CANCEL_ID:
        raise InputError("Invalid input. Please enter a valid integer that is >= 0.")
    return number


def parse_period(text: str) -> Optional[str]:
    """Return the period keyword, or ``None`` when the user typed ``0`` to cancel."""
    value = (text or "").strip().lower()
    if value == str(CANCEL_ID):
        return None
    if value not in PERIODS:
        raise InputError("Invalid input. Please enter 'days', 'hours', or 'minutes'.")
    return value


def period_component(session: CodingSession, period: str) -> int:
    """
    Integer component of ``end_time - midnight(start_time)`` for ``period``.

    ``days`` yields whole days, ``hours`` the hour component (0-23) and
    ``minutes`` the minute component (0-59) of that span.
    """
    start_of_day = datetime.combine(session.start_time.date(), datetime.min.time())
    span = session.end_time - start_of_day
    if period == "days":
        return span.days
    if period == "hours":
        return span.seconds // 3600
    if period == "minutes":
        return (span.seconds % 3600) // 60
    raise ValueError(f"Unknown period: {period}")


def format_duration(duration: timedelta) -> str:
    """Render a duration as ``hours:minutes:seconds``; hours may exceed 24."""
    whole_seconds = int(duration.total_seconds())
    minutes, secs = divmod(whole_seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
