"""
timelog.core.logging -- JSON-lines logging for store activity.

Store and snapshot code attach what they touched through ``extra``::

    log.debug("Entry at %d removed", t, extra={"store": "events", "timestamp": t})

``StructuredFormatter`` lifts those keys into the emitted JSON object so
a log line can be filtered by store, timestamp or label without parsing
the message text.  Records without them still format fine.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import IO, Optional

#: ``extra`` keys that are copied into the JSON line when present.
RECORD_FIELDS = ("store", "timestamp", "label", "label_ids", "count", "path")


class StructuredFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects.

    Always emitted: ``ts`` (UTC, ISO-8601), ``level``, ``logger``, ``msg``
    and ``at`` (``module:line``).  Any of ``RECORD_FIELDS`` set on the
    record are added under the same name, and a traceback, if any, under
    ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = {
            "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "at": f"{record.module}:{record.lineno}",
        }
        for name in RECORD_FIELDS:
            if name in record.__dict__:
                entry[name] = record.__dict__[name]

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(
    structured: bool = False,
    level: str = "INFO",
    logger_name: str = "timelog",
    stream: Optional[IO[str]] = None,
) -> Optional[logging.Handler]:
    """Set the timelog log level and, optionally, JSON output.

    With ``structured=True`` a single JSON handler writing to *stream*
    (stderr by default) is installed on *logger_name*, replacing one
    installed by an earlier call, and propagation is switched off.  The
    handler is returned so callers can remove it again.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not structured:
        return None

    for old in [h for h in logger.handlers if isinstance(h.formatter, StructuredFormatter)]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return handler
