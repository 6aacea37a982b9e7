"""Logging setup for applications embedding RowBag.

Library modules log through ``logging.getLogger(__name__)`` and never add
handlers on import. ``configure_logging`` attaches one stderr handler to the
``row_bag`` logger only, leaving the application's own logging untouched:

    from row_bag.core.log import configure_logging

    configure_logging(level="DEBUG")

At DEBUG level every executed INSERT is logged with its parameter count
(never the values), along with stream open/close and interceptor changes.
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Send ``row_bag`` records at *level* and above to stderr.

    Args:
        level: Logging level name, case-insensitive.
        json_logs: Emit one JSON object per record instead of plain lines.
    """
    if json_logs:
        formatter: dict[str, Any] = {"()": JsonFormatter}
    else:
        formatter = {"format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s"}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"row_bag": formatter},
            "handlers": {
                "row_bag": {"class": "logging.StreamHandler", "formatter": "row_bag"},
            },
            "loggers": {
                "row_bag": {
                    "handlers": ["row_bag"],
                    "level": level.upper(),
                    "propagate": False,
                },
            },
        }
    )
