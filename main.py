"""Entry point for the coding tracker.

Running this file opens the session database and starts the interactive
menu defined in ``coding_tracker.ui``.  Options override the values read
from the environment by ``coding_tracker.config``.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from coding_tracker.config import DB_FILE, LOG_FILE, LOG_LEVEL
from coding_tracker.data import SessionRepository
from coding_tracker.errors import StorageError
from coding_tracker.logging_config import configure_logging
from coding_tracker.ui import CodingTrackerApp, ConsoleInteraction

logger = logging.getLogger("coding_tracker.main")


@click.command(name="coding-tracker")
@click.option("--db", "db_file", default=DB_FILE, show_default=True, help="Path to the SQLite database file.")
@click.option("--log-level", default=LOG_LEVEL, show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Minimum level of log messages.")
@click.option("--log-file", default=LOG_FILE, help="Also write log messages to this file.")
def main(db_file: str, log_level: str, log_file: Optional[str]) -> None:
    """Track coding sessions from the terminal."""
    configure_logging(log_level, log_file)
    io = ConsoleInteraction()
    try:
        # Table output goes through the same console as the prompts
        repository = SessionRepository(db_file, display=io.show_sessions)
        CodingTrackerApp(repository, io).run()
    except StorageError:
        logger.exception("Storage failure, exiting")
        sys.exit(1)


if __name__ == "__main__":
    main()
