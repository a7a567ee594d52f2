"""
timelog.resolver -- Translate between the two ways of naming an entry.

An entry is addressed either by its timestamp key or by its position
counted from the newest entry (position 0).  Both directions read the
store's ascending timestamp index, so they always agree with each other
and with the current contents of the store:

    to_timestamp(Position(to_position(Timestamp(t)))) == t
"""

from __future__ import annotations

from bisect import bisect_left
from typing import TYPE_CHECKING, Optional

from timelog.core.types import EntryId, Position, Timestamp

if TYPE_CHECKING:
    from timelog.store import RecordStore


def _rank(index, timestamp: int) -> Optional[int]:
    """Position of *timestamp* in descending order, or None if absent."""
    i = bisect_left(index, timestamp)
    if i == len(index) or index[i] != timestamp:
        return None
    return len(index) - 1 - i


def to_timestamp(entry_id: EntryId, store: "RecordStore") -> Optional[int]:
    """Resolve *entry_id* to the timestamp of an existing entry."""
    index = store.index
    if isinstance(entry_id, Timestamp):
        return entry_id.value if _rank(index, entry_id.value) is not None else None
    if isinstance(entry_id, Position):
        p = entry_id.index
        if p < 0 or p >= len(index):
            return None
        return index[len(index) - 1 - p]
    raise TypeError(f"Expected Timestamp or Position, got {type(entry_id).__name__}")


def to_position(entry_id: EntryId, store: "RecordStore") -> Optional[int]:
    """Resolve *entry_id* to its current reverse-chronological position."""
    index = store.index
    if isinstance(entry_id, Timestamp):
        return _rank(index, entry_id.value)
    if isinstance(entry_id, Position):
        p = entry_id.index
        return p if 0 <= p < len(index) else None
    raise TypeError(f"Expected Timestamp or Position, got {type(entry_id).__name__}")


def exists(entry_id: EntryId, store: "RecordStore") -> bool:
    return to_timestamp(entry_id, store) is not None
