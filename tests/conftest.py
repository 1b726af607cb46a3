"""
Pytest configuration and fixtures for the coding tracker tests.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from coding_tracker.data import SessionRepository  # noqa: E402
from coding_tracker.models import CodingSession  # noqa: E402


class ScriptedInteraction:
    """Interaction double that replays canned input and records output."""

    def __init__(self, inputs=()):
        self.inputs = list(inputs)
        self.messages = []
        self.input_calls = 0
        self.keys_waited = 0
        self.shown_sessions = []
        self.shown_totals = []

    def show_message(self, text):
        self.messages.append(text)

    def show_message_timeout(self, text):
        self.messages.append(text)

    def get_input(self):
        self.input_calls += 1
        if not self.inputs:
            raise AssertionError("Ran out of scripted input")
        return self.inputs.pop(0)

    def wait_for_key(self):
        self.keys_waited += 1

    def show_sessions(self, sessions):
        self.shown_sessions.append(list(sessions))

    def show_daily_totals(self, totals):
        self.shown_totals.append(totals)

    def errors(self):
        return [m for m in self.messages if m.startswith("[red]")]


class RecordingRepository:
    """In-memory repository double that records every call made to it."""

    def __init__(self, sessions=()):
        self.sessions = list(sessions)
        self.calls = []
        self.next_id = max((s.id for s in self.sessions), default=0) + 1

    def create(self, start_time, end_time, duration):
        self.calls.append(("create", start_time, end_time, duration))
        session_id = self.next_id
        self.next_id += 1
        self.sessions.append(CodingSession(start_time, end_time, duration, session_id))
        return session_id

    def delete(self, session_id):
        self.calls.append(("delete", session_id))

    def get_all(self):
        self.calls.append(("get_all",))
        return list(self.sessions)

    def show_all(self):
        self.calls.append(("show_all",))

    def show_ordered(self, sessions):
        self.calls.append(("show_ordered", list(sessions)))

    def update_start_time(self, session_id, start_time):
        self.calls.append(("update_start_time", session_id, start_time))

    def update_end_time(self, session_id, end_time):
        self.calls.append(("update_end_time", session_id, end_time))

    def call_names(self):
        return [c[0] for c in self.calls]


def _make_session(session_id, start, end):
    """Build a session from ``YYYY-MM-DD HH:MM`` strings."""
    start_time = datetime.strptime(start, "%Y-%m-%d %H:%M")
    end_time = datetime.strptime(end, "%Y-%m-%d %H:%M")
    return CodingSession(start_time, end_time, end_time - start_time, session_id)


@pytest.fixture
def db_file(tmp_path):
    return str(tmp_path / "sessions.db")


@pytest.fixture
def repository(db_file):
    """A real SQLite repository whose displays are captured in ``displayed``."""
    displayed = []
    repo = SessionRepository(db_file, display=displayed.append)
    repo.displayed = displayed
    return repo


@pytest.fixture
def make_session():
    return _make_session


@pytest.fixture
def scripted():
    """Factory for interaction doubles fed with the given inputs."""
    return ScriptedInteraction


@pytest.fixture
def recording():
    """Factory for repository doubles preloaded with sessions."""
    return RecordingRepository


@pytest.fixture
def stored_session():
    """Look up one session in a repository by id, ``None`` when absent."""

    def lookup(repository, session_id):
        return next((s for s in repository.get_all() if s.id == session_id), None)

    return lookup
