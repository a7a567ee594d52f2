"""
timelog.system -- Top-level TimeLog: the public entry point.

    from timelog import TimeLog

    tl = TimeLog(data_dir="./data")
    tl.events.add_label("Work", "wrk")
    tl.events.add_entry_now("started the report", ["wrk"])
    tl.save()

Wires config, logging, both stores and their JSON snapshots together.
Nothing is written to disk except on ``save()`` (and the first load of
a missing file).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from timelog.core.config import Config
from timelog.core.logging import configure_logging
from timelog.persistence import JsonSnapshot
from timelog.store import CheckpointStore, EventStore

log = logging.getLogger(__name__)


class TimeLog:
    """Events and checkpoints for one data directory.

    Parameters
    ----------
    config:
        Full ``Config`` object.  If not given, ``data_dir`` and
        ``**kwargs`` are forwarded to ``Config``.
    data_dir:
        Shortcut -- if you just want to point at a directory and go.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        data_dir: Optional[str | Path] = None,
        **kwargs: Any,
    ) -> None:
        if config is not None:
            self.config = config
        elif data_dir is not None:
            self.config = Config.from_data_dir(data_dir, **kwargs)
        else:
            self.config = Config(**kwargs)

        self.config.ensure_directories()
        configure_logging(
            structured=self.config.structured_logging,
            level=self.config.log_level,
        )

        self._event_snapshot = JsonSnapshot(
            self.config.events_path,
            EventStore,
            label_id_policy=self.config.label_id_policy,
            indent=self.config.json_indent,
        )
        self._checkpoint_snapshot = JsonSnapshot(
            self.config.checkpoints_path,
            CheckpointStore,
            label_id_policy=self.config.label_id_policy,
            indent=self.config.json_indent,
        )
        self.reload()

    def reload(self) -> None:
        """Discard in-memory state and read both snapshots again."""
        self.events: EventStore = self._event_snapshot.load()
        self.checkpoints: CheckpointStore = self._checkpoint_snapshot.load()

    def save(self) -> None:
        self._event_snapshot.save(self.events)
        self._checkpoint_snapshot.save(self.checkpoints)

    def __enter__(self) -> "TimeLog":
        return self

    def __exit__(self, *exc: object) -> None:
        # persistence is explicit; unsaved changes are dropped
        pass
