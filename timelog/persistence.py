"""
timelog.persistence -- Whole-snapshot JSON load/save for record stores.

A store file is one pretty-printed JSON document holding the label
table and the entry map.  Saving writes a sibling ``.tmp`` file and
swaps it into place, so readers see either the old or the new snapshot.
Loading a file that doesn't exist yet creates it with an empty store.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Generic, Type

from timelog.core.errors import InvalidInputError
from timelog.core.types import E
from timelog.store import RecordStore

log = logging.getLogger(__name__)


class JsonSnapshot(Generic[E]):
    """Load/save a ``RecordStore`` subclass to a single JSON file."""

    def __init__(
        self,
        path: Path,
        store_cls: Type[RecordStore[E]],
        label_id_policy: str = "reuse",
        indent: int = 2,
    ):
        self.path = Path(path)
        self.store_cls = store_cls
        self.label_id_policy = label_id_policy
        self.indent = indent

    def load(self) -> RecordStore[E]:
        """Read the snapshot, or create and persist an empty store."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.info(
                "No store at %s; starting empty",
                self.path,
                extra=self._log_fields(count=0),
            )
            store = self.store_cls(label_id_policy=self.label_id_policy)
            self.save(store)
            return store

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"Corrupt store file {self.path}: {exc}") from exc

        store = self.store_cls.from_dict(data, label_id_policy=self.label_id_policy)
        log.info(
            "Loaded %d entries from %s",
            len(store),
            self.path,
            extra=self._log_fields(count=len(store)),
        )
        return store

    def save(self, store: RecordStore[E]) -> None:
        """Write the full snapshot, creating parent directories as needed.

        A failed write leaves the previous file untouched and removes the
        partial ``.tmp`` sibling before re-raising.
        """
        if not isinstance(store, self.store_cls):
            raise TypeError(
                f"Expected {self.store_cls.__name__}, got {type(store).__name__}"
            )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp.write_text(
                json.dumps(store.to_dict(), indent=self.indent), encoding="utf-8"
            )
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        log.info(
            "Saved %d entries to %s",
            len(store),
            self.path,
            extra=self._log_fields(count=len(store)),
        )

    def _log_fields(self, **fields) -> Dict:
        fields["store"] = self.store_cls.entries_key
        fields["path"] = str(self.path)
        return fields
