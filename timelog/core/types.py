"""
timelog.core.types -- Data types for the timelog record store.

Every structure here is a plain dataclass: no ORM, no magic,
serialisable to dict/JSON in one call.

Two entry payloads exist side by side:

* ``Event`` carries a *set* of tag ids (multi-valued association).
* ``Checkpoint`` carries a single project id or ``NO_LABEL``
  (single-valued association).

Both are keyed by an integer Unix timestamp inside a store.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Generic, Iterable, List, Optional, TypeVar, Union

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

#: Explicit "no label" marker for single-valued entries.  Always valid.
NO_LABEL = None


def now_timestamp() -> int:
    """Current UTC time as integer Unix seconds."""
    return int(datetime.now(timezone.utc).timestamp())


def normalize_ids(ids: Iterable[int]) -> List[int]:
    """Sorted, deduplicated list of label ids."""
    return sorted(set(ids))


def normalize_names(names: Iterable[str]) -> List[str]:
    """Sorted, deduplicated list of label short names."""
    return sorted(set(names))


def as_int(value: object) -> int:
    """Strict integer coercion for snapshot data.

    Accepts ints, integral floats and decimal strings; rejects bools and
    anything that would be truncated.
    """
    if isinstance(value, bool):
        raise TypeError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Expected an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"Expected an integer, got {value!r}")


def as_str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a string, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Label
# ---------------------------------------------------------------------------


@dataclass
class Label:
    """A named category: a tag on events or a project on checkpoints."""

    long_name: str
    short_name: str

    def to_dict(self) -> Dict:
        return {"long_name": self.long_name, "short_name": self.short_name}

    @classmethod
    def from_dict(cls, d: Dict) -> "Label":
        return cls(
            long_name=as_str(d["long_name"]), short_name=as_str(d["short_name"])
        )


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@dataclass
class Event:
    """A timestamped note with zero or more tags."""

    description: str
    label_ids: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.label_ids = normalize_ids(self.label_ids)

    @property
    def text(self) -> str:
        return self.description

    def label_refs(self) -> List[int]:
        return list(self.label_ids)

    def drop_label(self, label_id: int) -> bool:
        """Forget *label_id*; return True if it was referenced."""
        if label_id not in self.label_ids:
            return False
        self.label_ids.remove(label_id)
        return True

    def copy(self) -> "Event":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict:
        return {"description": self.description, "label_ids": list(self.label_ids)}

    @classmethod
    def from_dict(cls, d: Dict) -> "Event":
        return cls(
            description=as_str(d.get("description", "")),
            label_ids=[as_int(i) for i in d.get("label_ids", [])],
        )


@dataclass
class Checkpoint:
    """A timestamped message filed under at most one project."""

    message: str
    category: Optional[int] = NO_LABEL

    @property
    def text(self) -> str:
        return self.message

    def label_refs(self) -> List[int]:
        return [] if self.category is NO_LABEL else [self.category]

    def drop_label(self, label_id: int) -> bool:
        if self.category != label_id:
            return False
        self.category = NO_LABEL
        return True

    def copy(self) -> "Checkpoint":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict:
        return {"message": self.message, "category": self.category}

    @classmethod
    def from_dict(cls, d: Dict) -> "Checkpoint":
        category = d.get("category")
        return cls(
            message=as_str(d.get("message", "")),
            category=NO_LABEL if category is None else as_int(category),
        )


E = TypeVar("E", Event, Checkpoint)


# ---------------------------------------------------------------------------
# EntryId -- absolute timestamp or reverse-chronological position
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Timestamp:
    """Address an entry by its Unix timestamp key."""

    value: int


@dataclass(frozen=True)
class Position:
    """Address an entry by rank, 0 being the most recent.

    Positions shift whenever an entry is inserted or removed; resolve
    them through ``timelog.resolver`` before use.
    """

    index: int


EntryId = Union[Timestamp, Position]


# ---------------------------------------------------------------------------
# LogRecord -- derived presentation view
# ---------------------------------------------------------------------------


@dataclass
class LogRecord(Generic[E]):
    """One row of a log listing.  Never persisted."""

    timestamp: int
    entry: E
    duration: Optional[int]
    position: int

    def to_dict(self) -> Dict:
        return {
            "timestamp": self.timestamp,
            "entry": self.entry.to_dict(),
            "duration": self.duration,
            "position": self.position,
        }
