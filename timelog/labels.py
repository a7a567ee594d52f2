"""
Label registry -- owns tags/projects and hands out their ids.

Short names are what people type ("wrk", "gym"); they must be unique.
Long names are free text shown alongside.  Ids are small integers
stored inside entries, so the store needs the freed id back whenever
a label is removed in order to cascade the deletion.
"""

from __future__ import annotations

import heapq
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from timelog.core.errors import AlreadyExistsError, InvalidInputError
from timelog.core.types import Label, as_int

log = logging.getLogger(__name__)


class LabelRegistry:
    """
    Id-keyed label table with a short-name reverse index.

    ``policy="reuse"`` allocates the smallest id not currently in use;
    ``policy="monotonic"`` never reissues a freed id.
    """

    def __init__(self, policy: str = "reuse"):
        self.policy = policy
        self._labels: Dict[int, Label] = {}
        self._lookup: Dict[str, int] = {}  # short_name -> id
        self._free: List[int] = []  # min-heap of freed ids below _cursor
        self._cursor = 0  # "reuse": no free id below it outside _free
        self._next = 0  # "monotonic": next id to hand out

    # ── Public API ────────────────────────────────────────────

    def add(self, long_name: str, short_name: str) -> int:
        """Register a label and return its new id."""
        if not long_name or not long_name.strip():
            raise InvalidInputError("Label long name must not be empty")
        if not short_name or not short_name.strip():
            raise InvalidInputError("Label short name must not be empty")
        if short_name in self._lookup:
            log.debug("Rejected duplicate label short name %r", short_name)
            raise AlreadyExistsError(short_name)

        label_id = self._allocate()
        self._labels[label_id] = Label(long_name=long_name, short_name=short_name)
        self._lookup[short_name] = label_id
        log.debug("Label %r registered as id %d", short_name, label_id)
        return label_id

    def remove(self, short_name: str) -> int:
        """Delete a label by short name and return the freed id."""
        label_id = self._lookup.pop(short_name, None)
        if label_id is None:
            raise InvalidInputError(f"Label '{short_name}' not found")

        del self._labels[label_id]
        self._release(label_id)
        log.debug("Label %r (id %d) removed", short_name, label_id)
        return label_id

    def rename(self, short_name: str, long_name: str) -> None:
        """Change the long name of an existing label."""
        label_id = self._lookup.get(short_name)
        if label_id is None:
            raise InvalidInputError(f"Label '{short_name}' not found")
        if not long_name or not long_name.strip():
            raise InvalidInputError("Label long name must not be empty")
        self._labels[label_id].long_name = long_name

    def lookup_id(self, short_name: str) -> Optional[int]:
        return self._lookup.get(short_name)

    def get(self, label_id: int) -> Optional[Label]:
        label = self._labels.get(label_id)
        return None if label is None else Label(label.long_name, label.short_name)

    def short_name(self, label_id: int) -> Optional[str]:
        label = self._labels.get(label_id)
        return None if label is None else label.short_name

    def items(self) -> Iterator[Tuple[int, Label]]:
        """Iterate ``(id, Label)`` pairs in id order."""
        for label_id in sorted(self._labels):
            label = self._labels[label_id]
            yield label_id, Label(label.long_name, label.short_name)

    def missing(self, short_names: List[str]) -> List[str]:
        """Return the names from *short_names* that are not registered."""
        return [name for name in short_names if name not in self._lookup]

    def __contains__(self, label_id: object) -> bool:
        return label_id in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelRegistry):
            return NotImplemented
        return self._labels == other._labels

    # ── Snapshot ──────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Dict]:
        return {str(i): label.to_dict() for i, label in sorted(self._labels.items())}

    @classmethod
    def from_dict(cls, data: Dict, policy: str = "reuse") -> "LabelRegistry":
        """Rebuild a registry from its snapshot form.

        Raises InvalidInputError on malformed ids, empty names, or
        duplicate short names.
        """
        registry = cls(policy=policy)
        for key, raw in (data or {}).items():
            try:
                label_id = as_int(key)
                label = Label.from_dict(raw)
            except (TypeError, ValueError, KeyError) as exc:
                raise InvalidInputError(f"Malformed label record {key!r}") from exc
            if label_id < 0:
                raise InvalidInputError(f"Negative label id {label_id}")
            if label_id in registry._labels:
                raise InvalidInputError(f"Duplicate label id {label_id}")
            if not label.short_name.strip() or not label.long_name.strip():
                raise InvalidInputError(f"Label {label_id} has an empty name")
            if label.short_name in registry._lookup:
                raise InvalidInputError(
                    f"Duplicate label short name '{label.short_name}'"
                )
            registry._labels[label_id] = label
            registry._lookup[label.short_name] = label_id
        registry._rebuild_allocator()
        return registry

    # ── Internal ──────────────────────────────────────────────

    def _allocate(self) -> int:
        if self.policy == "monotonic":
            label_id = self._next
            self._next += 1
            return label_id

        # every free id below the cursor sits in the heap
        if self._free:
            return heapq.heappop(self._free)
        while self._cursor in self._labels:
            self._cursor += 1
        label_id = self._cursor
        self._cursor += 1
        return label_id

    def _release(self, label_id: int) -> None:
        if self.policy == "reuse" and label_id < self._cursor:
            heapq.heappush(self._free, label_id)

    def _rebuild_allocator(self) -> None:
        """Reset allocation state after ids were loaded from a snapshot.

        Gaps between loaded ids are found lazily by the cursor scan, so
        sparse ids cost nothing up front.
        """
        self._free = []
        self._cursor = 0
        self._next = max(self._labels) + 1 if self._labels else 0
