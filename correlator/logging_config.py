"""Logging configuration for the CLI.

Text logs are the default; JSON logs are one object per line for pipeline
collectors. Existing root handlers are left alone unless ``override`` is set.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_STANDARD_ATTRS = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "taskName",
}


def _utc_iso8601() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """Emit each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "timestamp": _utc_iso8601(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and key not in base:
                base[key] = value
        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    converter = time.gmtime  # UTC

    def __init__(self) -> None:
        super().__init__("%(asctime)sZ | %(levelname)s | %(name)s | %(message)s")


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None, override: bool = False) -> None:
    """Configure the root logger.

    Env vars:
      - CORRELATOR_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default WARNING)
      - CORRELATOR_LOG_JSON:  1/0 (default 0)
    """

    level_name = (level or os.environ.get("CORRELATOR_LOG_LEVEL") or "WARNING").upper()
    if json_logs is None:
        json_logs = os.environ.get("CORRELATOR_LOG_JSON", "0") == "1"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_logs else TextFormatter())

    if override:
        for existing in list(root.handlers):
            root.removeHandler(existing)
        root.addHandler(handler)
    elif not root.handlers:
        root.addHandler(handler)
