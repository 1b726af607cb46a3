"""
Interactive retry loops built on the pure validators in ``coding_tracker.utils``.

``ask`` keeps prompting until the parser accepts the input.  Validation
errors are shown to the user and never leave this module.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from rich.markup import escape

from coding_tracker.config import TIME_FORMAT
from coding_tracker.errors import InputError
from coding_tracker.utils import (
    parse_identifier,
    parse_period,
    validate_end_time,
    validate_start_time,
    validate_time_pair,
)

T = TypeVar("T")


def ask(io, parse: Callable[[str], T], prompt: Optional[str] = None) -> T:
    """
    Prompt through ``io`` until ``parse`` returns a value.

    :param io: Interaction port providing ``show_message`` and ``get_input``.
    :param parse: Callable turning raw text into a value or raising ``InputError``.
    :param prompt: Optional message shown before every attempt.
    :return: The first successfully parsed value.
    """
    while True:
        if prompt:
            io.show_message(prompt)
        try:
            return parse(io.get_input())
        except InputError as exc:
            # Messages may quote the raw input, which must not be read as markup
            io.show_message(f"[red]{escape(str(exc))}[/red]")


def prompt_identifier(io) -> int:
    return ask(io, parse_identifier, "[green]Please enter a number (must be an integer and >= 0):[/green]")


def prompt_period(io) -> Optional[str]:
    return ask(io, parse_period)


def prompt_start_time(io, time_format: str = TIME_FORMAT) -> datetime:
    return ask(
        io,
        lambda text: validate_start_time(text, time_format),
        f"[green]Enter the start time ({time_format}):[/green]",
    )


def prompt_end_time(io, time_format: str = TIME_FORMAT) -> datetime:
    return ask(
        io,
        lambda text: validate_end_time(text, time_format),
        f"[green]Enter the end time ({time_format}):[/green]",
    )


def prompt_time_pair(io, time_format: str = TIME_FORMAT) -> List[datetime]:
    """Ask for a start and an end time; the end is re-asked until it follows the start."""
    start = prompt_start_time(io, time_format)
    end = ask(
        io,
        lambda text: validate_time_pair(start, validate_end_time(text, time_format))[1],
        f"[green]Enter the end time ({time_format}):[/green]",
    )
    return [start, end]
