"""Process-wide logging setup.

Records may carry two groups of structured attributes, passed through
``extra=``: store events (``op``, ``task_id``) emitted by the repository and
the handlers, and request traces (``method``, ``path``, ``status``,
``elapsed_ms``) emitted by the tracing middleware. Only the groups a record
actually carries are rendered.
"""

import logging
import os
from typing import Any, Optional

_CONFIGURED = False

STORE_FIELDS = ("op", "task_id")
REQUEST_FIELDS = ("method", "path", "status", "elapsed_ms")


def store_event(op: str, task_id: Optional[int] = None) -> dict[str, Any]:
    """``extra=`` payload for a record about one repository operation."""
    return {"op": op, "task_id": "-" if task_id is None else task_id}


def _render(record: logging.LogRecord, fields: tuple[str, ...]) -> str:
    if not any(key in record.__dict__ for key in fields):
        return ""
    pairs = " ".join(f"{key}={record.__dict__.get(key, '-')}" for key in fields)
    return pairs + " "


class FieldFormatter(logging.Formatter):
    """Adds ``%(fields)s``: the structured attributes present on the record."""

    def format(self, record: logging.LogRecord) -> str:
        record.fields = _render(record, STORE_FIELDS) + _render(record, REQUEST_FIELDS)
        return super().format(record)


def configure_logging(level: Optional[str] = None, *, default: str = "INFO") -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (
        level
        or os.getenv("APP_LOG_LEVEL")
        or os.getenv("UVICORN_LOG_LEVEL")
        or os.getenv("LOG_LEVEL")
        or default
    ).upper()
    resolved_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            FieldFormatter("%(asctime)s %(levelname)s %(name)s %(fields)s%(message)s")
        )
        root.addHandler(handler)

    root.setLevel(resolved_level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.setLevel(resolved_level)
        logger.propagate = False

    _CONFIGURED = True
