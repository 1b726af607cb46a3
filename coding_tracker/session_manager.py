"""Live tracking of a coding session with a stopwatch.

The timer is an explicit value: ``Idle`` or ``Running``.  ``start_timer``
and ``stop_timer`` take the current state and return the next one, so a
second start while running is rejected instead of silently restarting.
Elapsed time is measured on a monotonic clock; wall-clock timestamps are
reconstructed only when the session stops.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Tuple, Union

from coding_tracker.errors import TimerError
from coding_tracker.models import CodingSession
from coding_tracker.utils import format_duration, session_duration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No measurement in progress."""


@dataclass(frozen=True)
class Running:
    """A measurement started at ``started_at`` seconds on the monotonic clock."""

    started_at: float


TimerState = Union[Idle, Running]

IDLE = Idle()

# Shortest elapsed time reported, so a stopped session always ends after it starts.
MIN_ELAPSED = timedelta(microseconds=1)


def start_timer(state: TimerState, clock: Callable[[], float] = time.monotonic) -> Running:
    if isinstance(state, Running):
        raise TimerError("A coding session is already running.")
    return Running(started_at=clock())


def stop_timer(state: TimerState, clock: Callable[[], float] = time.monotonic) -> Tuple[Idle, timedelta]:
    """Stop a running timer and return the idle state with the elapsed time."""
    if not isinstance(state, Running):
        raise TimerError("No coding session is running.")
    elapsed = timedelta(seconds=clock() - state.started_at)
    return IDLE, max(elapsed, MIN_ELAPSED)


def track_coding_session(
    repository,
    io,
    clock: Callable[[], float] = time.monotonic,
    now: Callable[[], datetime] = datetime.now,
) -> CodingSession:
    """
    Time a coding session until the user presses a key, then persist it.

    Blocks on ``io.wait_for_key``; there is no way to cancel once started.
    The start time is reconstructed as the stop instant minus the elapsed time.
    """
    state = start_timer(IDLE, clock)
    io.show_message_timeout("\n[green]Starting Coding Session...[/green]\n")
    io.show_message_timeout("\n[red]Press any key to stop session...[/red]\n")
    io.wait_for_key()

    state, elapsed = stop_timer(state, clock)
    end_time = now()
    start_time = end_time - elapsed
    session = CodingSession(
        start_time=start_time,
        end_time=end_time,
        duration=session_duration(start_time, end_time),
    )
    session.id = repository.create(session.start_time, session.end_time, session.duration)
    logger.info("Tracked live session %s lasting %s", session.id, session.duration)

    io.show_message_timeout("\n[green]Session Stopped.[/green]\n")
    io.show_message_timeout(f"\n[green]Start Time: {session.start_time}[/green]\n")
    io.show_message_timeout(f"\n[green]End Time: {session.end_time}[/green]\n")
    io.show_message_timeout(f"\n[green]Duration: {format_duration(session.duration)}[/green]\n")
    return session
