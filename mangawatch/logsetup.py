"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys
from datetime import datetime


class _LocalRfc3339Formatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created).astimezone().isoformat(
            timespec="microseconds"
        )


class _AppHandler(logging.StreamHandler):
    """Marks the handler installed by init_logger."""


def init_logger() -> None:
    """Log INFO and above to stdout with local time, level, file and line.

    Raises RuntimeError when logging was already initialised.
    """
    root = logging.getLogger()
    if any(isinstance(h, _AppHandler) for h in root.handlers):
        raise RuntimeError("Failed to initialize logger: a logger is already set")
    handler = _AppHandler(sys.stdout)
    handler.setFormatter(
        _LocalRfc3339Formatter(
            "%(asctime)s %(levelname)s %(filename)s:%(lineno)d: %(message)s"
        )
    )
    root.addHandler(handler)
    root.setLevel(logging.INFO)