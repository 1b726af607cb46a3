"""Console user interface for the coding tracker.

``ConsoleInteraction`` is the input/output port handed to the session
operations: it prints ``rich`` markup, reads lines and waits for single
key presses.  ``CodingTrackerApp`` is the main menu loop that dispatches
to insert, update, delete, live tracking, period filtering and the daily
report.
"""
from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional, Tuple

import click
import pandas as pd
from rich.console import Console
from rich.table import Table

from coding_tracker.analytics import filter_sessions_by_period, show_report
from coding_tracker.config import MESSAGE_DELAY
from coding_tracker.editor import delete_session, insert_session, show_sessions, update_session
from coding_tracker.models import CodingSession
from coding_tracker.session_manager import track_coding_session
from coding_tracker.utils import format_duration


class ConsoleInteraction:
    """Prompt and display through a ``rich`` console."""

    def __init__(self, console: Optional[Console] = None, message_delay: float = MESSAGE_DELAY) -> None:
        self.console = console or Console()
        self.message_delay = message_delay

    def show_message(self, text: str) -> None:
        self.console.print(text)

    def show_message_timeout(self, text: str) -> None:
        """Print a message and leave it on screen briefly before continuing."""
        self.console.print(text)
        if self.message_delay > 0:
            time.sleep(self.message_delay)

    def get_input(self) -> str:
        return self.console.input()

    def wait_for_key(self) -> None:
        click.getchar()

    def show_sessions(self, sessions: List[CodingSession]) -> None:
        """Render sessions as a table in the order given."""
        table = Table(title="Coding Sessions")
        for header in ("ID", "Start", "End", "Duration"):
            table.add_column(header)
        for session in sessions:
            table.add_row(
                str(session.id),
                session.start_time.strftime("%m-%d-%Y %H:%M:%S"),
                session.end_time.strftime("%m-%d-%Y %H:%M:%S"),
                format_duration(session.duration),
            )
        self.console.print(table)

    def show_daily_totals(self, totals: pd.Series) -> None:
        table = Table(title="Coding Time per Day")
        table.add_column("Date")
        table.add_column("Hours", justify="right")
        for day, hours in totals.items():
            table.add_row(day.strftime("%m-%d-%Y"), f"{hours:0.2f}")
        self.console.print(table)


class CodingTrackerApp:
    """Main menu loop of the coding tracker."""

    def __init__(self, repository, io: ConsoleInteraction) -> None:
        self.repository = repository
        self.io = io
        self.actions: Dict[str, Tuple[str, Callable[[], object]]] = {
            "1": ("View all sessions", lambda: show_sessions(self.repository)),
            "2": ("Insert a session", lambda: insert_session(self.repository, self.io)),
            "3": ("Update a session", lambda: update_session(self.repository, self.io)),
            "4": ("Delete a session", lambda: delete_session(self.repository, self.io)),
            "5": ("Start a live coding session", lambda: track_coding_session(self.repository, self.io)),
            "6": ("Filter sessions by period", lambda: filter_sessions_by_period(self.repository, self.io)),
            "7": ("Daily report", self.open_report),
        }

    def build_menu(self) -> None:
        self.io.show_message("\n[bold]Coding Tracker[/bold]")
        for key, (label, _) in self.actions.items():
            self.io.show_message(f"[cyan]{key}.[/cyan] {label}")
        self.io.show_message("[cyan]0.[/cyan] Exit")
        self.io.show_message("[green]Input: [/green]")

    def open_report(self) -> None:
        self.io.show_message("[green]Save a chart to (PNG path, leave empty to skip):[/green]")
        chart_path = self.io.get_input().strip() or None
        show_report(self.repository, self.io, chart_path)

    def run(self) -> None:
        """Show the menu until the user chooses to exit."""
        while True:
            self.build_menu()
            choice = self.io.get_input().strip()
            if choice == "0":
                self.io.show_message("[green]Goodbye![/green]")
                return
            action = self.actions.get(choice)
            if action is None:
                self.io.show_message_timeout("\n[red]Invalid choice, please pick an option from the menu.[/red]\n")
                continue
            action[1]()
