"""
timelog -- Embedded record store for timestamped events and checkpoints.

    from timelog import TimeLog, Position

    tl = TimeLog(data_dir="./data")
    tl.events.add_label("Reading", "rd")
    tl.events.add_entry(1700000000, "chapter 3", ["rd"])
    tl.events.duration(Position(0))
    tl.save()
"""

from timelog.core.config import Config
from timelog.core.errors import AlreadyExistsError, InvalidInputError, TimelogError
from timelog.core.types import (
    NO_LABEL,
    Checkpoint,
    Event,
    Label,
    LogRecord,
    Position,
    Timestamp,
)
from timelog.labels import LabelRegistry
from timelog.persistence import JsonSnapshot
from timelog.store import CheckpointStore, EventStore, RecordStore
from timelog.system import TimeLog

__version__ = "0.1.0"

__all__ = [
    "TimeLog",
    "Config",
    "RecordStore",
    "EventStore",
    "CheckpointStore",
    "LabelRegistry",
    "JsonSnapshot",
    "Label",
    "Event",
    "Checkpoint",
    "LogRecord",
    "Position",
    "Timestamp",
    "NO_LABEL",
    "TimelogError",
    "InvalidInputError",
    "AlreadyExistsError",
]
