"""
timelog.duration -- Elapsed time between consecutive entries.

The duration of an entry is the number of seconds since the entry
just before it.  The oldest entry has no predecessor and therefore no
duration (``None``, never ``0``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from timelog import resolver
from timelog.core.errors import InvalidInputError
from timelog.core.types import EntryId, LogRecord, Position

if TYPE_CHECKING:
    from timelog.store import RecordStore


def duration(entry_id: EntryId, store: "RecordStore") -> Optional[int]:
    """Seconds between the entry and its chronological predecessor."""
    position = resolver.to_position(entry_id, store)
    if position is None:
        return None
    timestamp = resolver.to_timestamp(Position(position), store)
    previous = resolver.to_timestamp(Position(position + 1), store)
    if previous is None:
        return None
    return timestamp - previous


def _record(store: "RecordStore", position: int) -> LogRecord:
    timestamp = resolver.to_timestamp(Position(position), store)
    return LogRecord(
        timestamp=timestamp,
        entry=store.get_entry(Position(position)),
        duration=duration(Position(position), store),
        position=position,
    )


def get_log_between(start: int, end: int, store: "RecordStore") -> List[LogRecord]:
    """
    Entries strictly between *start* and *end*, newest first.

    The bounds may be given in either order; both are exclusive.
    """
    for bound in (start, end):
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidInputError(
                f"Log bound must be an integer timestamp, got {bound!r}"
            )
    early, late = min(start, end), max(start, end)

    records = []
    for position, timestamp in enumerate(reversed(store.index)):
        if timestamp >= late:
            continue
        if timestamp <= early:
            break
        records.append(_record(store, position))
    return records


def get_log(store: "RecordStore", limit: Optional[int] = None) -> List[LogRecord]:
    """The newest *limit* entries (all of them when None), newest first."""
    if limit is not None and (
        isinstance(limit, bool) or not isinstance(limit, int) or limit < 0
    ):
        raise InvalidInputError(
            f"Log limit must be a non-negative integer, got {limit!r}"
        )
    count = len(store) if limit is None else min(limit, len(store))
    return [_record(store, position) for position in range(count)]
