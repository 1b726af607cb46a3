"""
Session editing operations for the coding tracker.

Insert, update and delete work against any repository exposing the
``SessionRepository`` methods and any interaction port exposing
``show_message``, ``show_message_timeout`` and ``get_input``.  Both are
passed in explicitly so the flows can be driven by scripted input.
"""
from __future__ import annotations

import logging
from typing import Optional

from coding_tracker.config import TIME_FORMAT
from coding_tracker.models import CANCEL_ID, CodingSession
from coding_tracker.prompts import prompt_end_time, prompt_identifier, prompt_start_time, prompt_time_pair
from coding_tracker.utils import session_duration

logger = logging.getLogger(__name__)


def show_sessions(repository) -> None:
    """Display every stored session."""
    repository.show_all()


def insert_session(repository, io, session: Optional[CodingSession] = None,
                   time_format: str = TIME_FORMAT) -> CodingSession:
    """
    Ask for validated start/end times and persist a new session.

    :param repository: Session store receiving the ``create`` call.
    :param io: Interaction port used for prompting.
    :param session: Optional empty session shell to fill in.
    :return: The filled session, carrying the id assigned by storage.
    """
    session = session or CodingSession()
    session.start_time, session.end_time = prompt_time_pair(io, time_format)
    session.duration = session_duration(session.start_time, session.end_time)
    session.id = repository.create(session.start_time, session.end_time, session.duration)
    logger.info("Recorded session %s lasting %s", session.id, session.duration)
    return session


def choose_session_id(repository, io, instruction: str) -> Optional[int]:
    """Show all sessions and ask for an id; ``None`` means the user backed out."""
    repository.show_all()
    io.show_message_timeout(instruction)
    session_id = prompt_identifier(io)
    if session_id == CANCEL_ID:
        return None
    return session_id


def delete_session(repository, io) -> Optional[int]:
    """Delete the session chosen by the user. Returns the id deleted, if any."""
    session_id = choose_session_id(
        repository, io,
        "\n\n[red]Please type the ID of the session to delete or 0 to return to Main Menu: [/red]",
    )
    if session_id is None:
        return None
    repository.delete(session_id)
    return session_id


def update_session(repository, io, time_format: str = TIME_FORMAT) -> Optional[int]:
    """
    Update the start or the end time of a session chosen by the user.

    The property menu is asked once: any answer other than ``1`` or ``2``
    returns to the caller without touching the session.
    """
    session_id = choose_session_id(
        repository, io,
        "\n\n[yellow]Please type the ID of the session you would like to update. "
        "Type 0 to return to Main Menu: [/yellow]",
    )
    if session_id is None:
        return None

    io.show_message("\n[yellow]Which property would you like to update[/yellow]")
    io.show_message("\n[dark_green]1. Start Time[/dark_green]")
    io.show_message("\n[dark_green]2. End Time[/dark_green]")
    io.show_message("\n[green]Input: [/green]")

    choice = io.get_input().strip()
    if choice == "1":
        repository.update_start_time(session_id, prompt_start_time(io, time_format))
    elif choice == "2":
        repository.update_end_time(session_id, prompt_end_time(io, time_format))
    else:
        io.show_message_timeout("\n[red]You have inputted a wrong choice. Going back to Menu[/red]\n")
        return None
    return session_id
