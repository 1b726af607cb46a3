"""Period filtering and daily reports for the coding tracker.

``filter_sessions_by_period`` samples one representative session for every
distinct day, hour or minute component of ``end_time - midnight(start_time)``
and shows them ordered by duration.  ``show_report`` sums tracked time per
calendar day and can save the totals as a bar chart.  Grouping is done with
pandas; charts are drawn with matplotlib.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import matplotlib
# Use a non-interactive backend; charts are only written to files
matplotlib.use("Agg")
from matplotlib.figure import Figure
import pandas as pd

from coding_tracker.models import CodingSession
from coding_tracker.prompts import ask
from coding_tracker.utils import parse_period, period_component

logger = logging.getLogger(__name__)


def representatives_by_period(sessions: Sequence[CodingSession], period: str) -> List[CodingSession]:
    """
    Keep the first session of every ``period`` bucket, sorted by duration.

    "First" follows the order of ``sessions``; sessions with equal durations
    keep that order as well.
    """
    if not sessions:
        return []
    df = pd.DataFrame(
        {
            "position": range(len(sessions)),
            "bucket": [period_component(s, period) for s in sessions],
            "duration": [s.duration for s in sessions],
        }
    )
    firsts = df.groupby("bucket", sort=False).head(1)
    ordered = firsts.sort_values("duration", kind="stable")
    return [sessions[int(pos)] for pos in ordered["position"]]


def filter_sessions_by_period(repository, io) -> Optional[List[CodingSession]]:
    """
    Ask for a period and show one representative session per bucket.

    Returns the sessions shown, or ``None`` when the user typed ``0``.
    """
    sessions = repository.get_all()

    io.show_message(
        "\n[green]Which period do you want to filter by? (days, hours, minutes)[/green]. Press '0' to exit: "
    )
    period = ask(io, parse_period)
    if period is None:
        return None

    filtered = representatives_by_period(sessions, period)
    logger.debug("Period %s kept %d of %d sessions", period, len(filtered), len(sessions))
    repository.show_ordered(filtered)
    return filtered


def daily_totals(sessions: Sequence[CodingSession]) -> pd.Series:
    """Hours of tracked time per calendar day of the start time."""
    if not sessions:
        return pd.Series(dtype=float, name="hours")
    df = pd.DataFrame(
        {
            "date": [s.start_time.date() for s in sessions],
            "hours": [s.duration.total_seconds() / 3600.0 for s in sessions],
        }
    )
    return df.groupby("date")["hours"].sum().sort_index()


def save_chart(totals: pd.Series, path: str) -> None:
    """Render ``totals`` as a bar chart PNG at ``path``."""
    fig = Figure(figsize=(8, 4))
    ax = fig.add_subplot(111)
    labels = [d.strftime("%m-%d-%Y") for d in totals.index]
    ax.bar(labels, totals.values.tolist())
    ax.set_ylabel("Hours")
    ax.set_title("Coding time per day")
    ax.tick_params(axis="x", labelrotation=45)
    fig.tight_layout()
    fig.savefig(path)
    logger.info("Saved chart of %d day(s) to %s", len(totals), path)


def show_report(repository, io, chart_path: Optional[str] = None) -> pd.Series:
    """Display per-day totals and optionally save them as a chart."""
    totals = daily_totals(repository.get_all())
    if totals.empty:
        io.show_message_timeout("\n[yellow]No sessions recorded yet.[/yellow]\n")
        return totals
    io.show_daily_totals(totals)
    if chart_path:
        save_chart(totals, chart_path)
        io.show_message_timeout(f"\n[green]Chart saved to {chart_path}[/green]\n")
    return totals
