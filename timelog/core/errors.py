"""
timelog.core.errors -- Error taxonomy for the record store.

"Not found" is never an error here: lookups and removals by id return
``None``.  Errors are reserved for caller-input violations.
"""

from __future__ import annotations


class TimelogError(Exception):
    """Base class for all timelog errors."""


class InvalidInputError(TimelogError, ValueError):
    """Empty required field, unknown label or entry, malformed bounds."""


class AlreadyExistsError(TimelogError, ValueError):
    """A label with the requested short name is already registered."""

    def __init__(self, short_name: str) -> None:
        super().__init__(f"Label '{short_name}' already exists")
        self.short_name = short_name
