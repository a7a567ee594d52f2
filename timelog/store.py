"""
timelog.store -- The record store: timestamped entries plus their labels.

``RecordStore`` holds the shared machinery (entry map, sorted index,
label registry, cascade on label removal).  The two flavors differ only
in how an entry points at labels:

* ``EventStore``: events carry any number of tags.
* ``CheckpointStore``: checkpoints carry at most one project.

Timestamps are the primary key.  Writing to an existing timestamp
replaces the old entry in full.
"""

from __future__ import annotations

import logging
from bisect import bisect_left, insort
from typing import Dict, Generic, Iterable, List, Optional, Type

from timelog import duration as _duration
from timelog import resolver
from timelog.core.errors import InvalidInputError
from timelog.core.types import (
    NO_LABEL,
    Checkpoint,
    E,
    EntryId,
    Event,
    LogRecord,
    normalize_ids,
    as_int,
    normalize_names,
    now_timestamp,
)
from timelog.labels import LabelRegistry

log = logging.getLogger(__name__)


def _check_timestamp(timestamp: object) -> int:
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise InvalidInputError(f"Timestamp must be an integer, got {timestamp!r}")
    return timestamp


class RecordStore(Generic[E]):
    """
    Timestamp-keyed entries referencing labels from a ``LabelRegistry``.

    Subclasses set ``entry_cls`` and the two snapshot keys, and implement
    the three association hooks ``_build``, ``_attach`` and ``_detach``.
    """

    entry_cls: Type[E]
    labels_key = "labels"
    entries_key = "entries"

    def __init__(self, label_id_policy: str = "reuse"):
        self.labels = LabelRegistry(policy=label_id_policy)
        self._entries: Dict[int, E] = {}
        self._index: List[int] = []  # ascending timestamps

    # ── Labels ────────────────────────────────────────────────

    def add_label(self, long_name: str, short_name: str) -> int:
        return self.labels.add(long_name, short_name)

    def remove_label(self, short_name: str) -> None:
        """Delete a label and strip it from every entry that uses it."""
        label_id = self.labels.remove(short_name)
        stripped = sum(1 for entry in self._entries.values() if entry.drop_label(label_id))
        log.debug(
            "Label %r removed; cascaded into %d entries",
            short_name,
            stripped,
            extra=self._log_fields(label=short_name, count=stripped),
        )

    def entries_with_label(self, short_name: str) -> List[int]:
        """Timestamps (ascending) of entries referencing *short_name*."""
        label_id = self.labels.lookup_id(short_name)
        if label_id is None:
            raise InvalidInputError(f"Label '{short_name}' not found")
        return [t for t in self._index if label_id in self._entries[t].label_refs()]

    def labels_of(self, entry_id: EntryId) -> Optional[List[str]]:
        """Short names of the labels on an entry, or None if it doesn't exist."""
        entry = self._get_entry_mut(entry_id)
        if entry is None:
            return None
        return [self.labels.short_name(i) for i in entry.label_refs()]

    # ── Entries ───────────────────────────────────────────────

    def add_entry(
        self, timestamp: int, text: str, label_short_names: Iterable[str] = ()
    ) -> None:
        """Insert an entry, replacing any entry already at *timestamp*."""
        timestamp = _check_timestamp(timestamp)
        ids = self._resolve_names(label_short_names)
        entry = self._build(text, ids)

        if timestamp not in self._entries:
            insort(self._index, timestamp)
        else:
            log.debug(
                "Overwriting entry at %d",
                timestamp,
                extra=self._log_fields(timestamp=timestamp),
            )
        self._entries[timestamp] = entry
        log.debug(
            "Entry added at %d with labels %s",
            timestamp,
            ids,
            extra=self._log_fields(timestamp=timestamp, label_ids=ids),
        )

    def add_entry_now(self, text: str, label_short_names: Iterable[str] = ()) -> int:
        """Insert an entry stamped with the current time; return the stamp."""
        timestamp = now_timestamp()
        self.add_entry(timestamp, text, label_short_names)
        return timestamp

    def remove_entry(self, entry_id: EntryId) -> Optional[E]:
        timestamp = resolver.to_timestamp(entry_id, self)
        if timestamp is None:
            return None
        del self._index[bisect_left(self._index, timestamp)]
        log.debug(
            "Entry at %d removed",
            timestamp,
            extra=self._log_fields(timestamp=timestamp),
        )
        return self._entries.pop(timestamp)

    def get_entry(self, entry_id: EntryId) -> Optional[E]:
        """Return a copy of the addressed entry, or None."""
        entry = self._get_entry_mut(entry_id)
        return None if entry is None else entry.copy()

    def add_labels_to_entry(self, entry_id: EntryId, short_names: Iterable[str]) -> None:
        entry = self._require_entry(entry_id)
        ids = self._resolve_names(short_names)
        self._attach(entry, ids)

    def remove_labels_from_entry(
        self, entry_id: EntryId, short_names: Iterable[str]
    ) -> None:
        entry = self._require_entry(entry_id)
        ids = self._resolve_names(short_names)
        self._detach(entry, ids)

    # ── Queries ───────────────────────────────────────────────

    def duration(self, entry_id: EntryId) -> Optional[int]:
        return _duration.duration(entry_id, self)

    def get_log_between(self, start: int, end: int) -> List[LogRecord[E]]:
        return _duration.get_log_between(start, end, self)

    def get_log(self, limit: Optional[int] = None) -> List[LogRecord[E]]:
        return _duration.get_log(self, limit)

    @property
    def index(self) -> List[int]:
        """Ascending timestamp index.  Treat as read-only."""
        return self._index

    def timestamps(self) -> List[int]:
        return list(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordStore):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.labels == other.labels
            and self._entries == other._entries
        )

    # ── Snapshot ──────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Dict]:
        return {
            self.labels_key: self.labels.to_dict(),
            self.entries_key: {str(t): self._entries[t].to_dict() for t in self._index},
        }

    @classmethod
    def from_dict(cls, data: Dict, label_id_policy: str = "reuse") -> "RecordStore[E]":
        """Rebuild a store from its snapshot form, checking label references."""
        if not isinstance(data, dict):
            raise InvalidInputError("Snapshot must be a JSON object")
        labels = data.get(cls.labels_key) or {}
        entries = data.get(cls.entries_key) or {}
        if not isinstance(labels, dict) or not isinstance(entries, dict):
            raise InvalidInputError(
                f"Snapshot sections '{cls.labels_key}' and '{cls.entries_key}' "
                f"must be JSON objects"
            )

        store = cls(label_id_policy=label_id_policy)
        store.labels = LabelRegistry.from_dict(labels, policy=label_id_policy)
        for key, raw in entries.items():
            try:
                timestamp = as_int(key)
                entry = cls.entry_cls.from_dict(raw)
            except (TypeError, ValueError, AttributeError) as exc:
                raise InvalidInputError(f"Malformed entry record {key!r}") from exc
            dangling = [i for i in entry.label_refs() if i not in store.labels]
            if dangling:
                raise InvalidInputError(
                    f"Entry {timestamp} references unknown label ids {dangling}"
                )
            if timestamp in store._entries:
                raise InvalidInputError(f"Duplicate entry timestamp {timestamp}")
            store._entries[timestamp] = entry
        store._index = sorted(store._entries)
        return store

    # ── Internal ──────────────────────────────────────────────

    def _log_fields(self, **fields) -> Dict:
        """``extra`` payload picked up by ``StructuredFormatter``."""
        fields["store"] = self.entries_key
        return fields

    def _get_entry_mut(self, entry_id: EntryId) -> Optional[E]:
        timestamp = resolver.to_timestamp(entry_id, self)
        return None if timestamp is None else self._entries[timestamp]

    def _require_entry(self, entry_id: EntryId) -> E:
        entry = self._get_entry_mut(entry_id)
        if entry is None:
            raise InvalidInputError(f"No entry at {entry_id}")
        return entry

    def _resolve_names(self, short_names: Iterable[str]) -> List[int]:
        """Map short names to ids, failing before any mutation if one is unknown."""
        if isinstance(short_names, str):
            short_names = [short_names]
        names = normalize_names(short_names)
        missing = self.labels.missing(names)
        if missing:
            log.debug(
                "Rejected unknown labels %s",
                missing,
                extra=self._log_fields(label=missing),
            )
            raise InvalidInputError(f"Unknown labels: {', '.join(missing)}")
        return [self.labels.lookup_id(name) for name in names]

    def _build(self, text: str, ids: List[int]) -> E:
        raise NotImplementedError

    def _attach(self, entry: E, ids: List[int]) -> None:
        raise NotImplementedError

    def _detach(self, entry: E, ids: List[int]) -> None:
        raise NotImplementedError


class EventStore(RecordStore[Event]):
    """Events tagged with any number of tags."""

    entry_cls = Event
    labels_key = "tags"
    entries_key = "events"

    def _build(self, text: str, ids: List[int]) -> Event:
        return Event(description=text, label_ids=ids)

    def _attach(self, entry: Event, ids: List[int]) -> None:
        entry.label_ids = normalize_ids(entry.label_ids + ids)

    def _detach(self, entry: Event, ids: List[int]) -> None:
        entry.label_ids = [i for i in entry.label_ids if i not in ids]


class CheckpointStore(RecordStore[Checkpoint]):
    """Checkpoints filed under at most one project."""

    entry_cls = Checkpoint
    labels_key = "projects"
    entries_key = "checkpoints"

    def _single(self, ids: List[int], allow_none: bool) -> Optional[int]:
        if len(ids) > 1:
            raise InvalidInputError("A checkpoint belongs to at most one project")
        if not ids:
            if allow_none:
                return NO_LABEL
            raise InvalidInputError("A project short name is required")
        return ids[0]

    def _build(self, text: str, ids: List[int]) -> Checkpoint:
        return Checkpoint(message=text, category=self._single(ids, allow_none=True))

    def _attach(self, entry: Checkpoint, ids: List[int]) -> None:
        entry.category = self._single(ids, allow_none=False)

    def _detach(self, entry: Checkpoint, ids: List[int]) -> None:
        if entry.category is not NO_LABEL and entry.category in ids:
            entry.category = NO_LABEL
