"""Exception types raised by the coding tracker."""
from __future__ import annotations


class TrackerError(Exception):
    """Base class for every error raised by ``coding_tracker``."""


class InputError(TrackerError, ValueError):
    """Raised when user supplied text cannot be turned into a valid value."""


class TimerError(TrackerError):
    """Raised when the live tracking timer is used out of order."""


class StorageError(TrackerError):
    """Raised when the SQLite database cannot be read or written."""
