"""
Configuration for the coding tracker.

Values are read from the environment once at import time.  A ``.env`` file
in the working directory is honoured via ``python-dotenv`` so the database
location and display settings can be changed without touching the code.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Locate the database at project root unless overridden.
DB_FILE = os.getenv(
    "CODING_TRACKER_DB",
    os.path.join(os.path.abspath(os.path.dirname(__file__)), "..", "coding_tracker.db"),
)

# Format used for every timestamp typed by the user.
TIME_FORMAT = os.getenv("CODING_TRACKER_TIME_FORMAT", "%Y-%m-%d %H:%M")

# Seconds a transient message stays on screen before the next prompt.
MESSAGE_DELAY = float(os.getenv("CODING_TRACKER_MESSAGE_DELAY", "0.8"))

LOG_LEVEL = os.getenv("CODING_TRACKER_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("CODING_TRACKER_LOG_FILE") or None
