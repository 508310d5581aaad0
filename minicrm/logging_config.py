"""
Logging for the CLI and the stores.

Nothing is configured at import time. Log lines go to stderr, stdout belongs
to the CLI output. Two formats:

  text   2026-01-01 10:00:00,000 INFO minicrm.storage.json_store | contacts saved: 2 in data/contacts.json (next id 3)
  json   {"event": "contacts saved", "level": "INFO", ..., "store": {"count": 2, "next_id": 3, "path": "data/contacts.json"}}
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Union

_TEXT_FMT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


class ContactLogFormatter(logging.Formatter):
    """One JSON object per record; store events carry their file state under "store"."""

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None) or record.getMessage(),
            "message": record.getMessage(),
        }
        store = getattr(record, "store", None)
        if store:
            line["store"] = store
        if record.exc_info:
            line["error"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, sort_keys=True)


def configure_logging(*, level: str = "WARNING", fmt: str = "text") -> bool:
    """
    Install one stderr handler on the root logger.

    Returns False and changes nothing when the root logger already has
    handlers (test runner, embedding app).
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    formatter = ContactLogFormatter() if fmt == "json" else logging.Formatter(_TEXT_FMT)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), handlers=[handler])
    return True


def log_store_event(
    logger: logging.Logger,
    event: str,
    *,
    path: Union[str, Path],
    count: int,
    next_id: int,
) -> None:
    """INFO line describing the contacts file after a load or save."""
    store = {"path": str(path), "count": count, "next_id": next_id}
    logger.info(
        "%s: %d in %s (next id %d)",
        event,
        count,
        store["path"],
        next_id,
        extra={"event": event, "store": store},
    )
