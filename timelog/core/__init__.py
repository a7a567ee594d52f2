"""timelog.core -- Configuration, type definitions, and errors."""

from timelog.core.config import Config
from timelog.core.errors import AlreadyExistsError, InvalidInputError, TimelogError
from timelog.core.types import (
    NO_LABEL,
    Checkpoint,
    EntryId,
    Event,
    Label,
    LogRecord,
    Position,
    Timestamp,
    now_timestamp,
)

__all__ = [
    "Config",
    "TimelogError",
    "InvalidInputError",
    "AlreadyExistsError",
    "NO_LABEL",
    "Checkpoint",
    "EntryId",
    "Event",
    "Label",
    "LogRecord",
    "Position",
    "Timestamp",
    "now_timestamp",
]
