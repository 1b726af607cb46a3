"""
Logging setup for the coding tracker.

Console output goes through ``rich`` so log lines blend with the rest of the
interface; an optional plain text file receives the same records.
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``coding_tracker`` logger hierarchy.

    :param level: Name of the minimum level to emit (``DEBUG``, ``INFO`` ...).
    :param log_file: Optional path of a file that also receives every record.
    :return: The package root logger.
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger("coding_tracker")
    logger.setLevel(numeric_level)
    # Re-running configuration replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
