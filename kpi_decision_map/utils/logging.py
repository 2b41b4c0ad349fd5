"""
Logging setup for KPI Decision Map.

``configure_logging(config)`` is called once by the CLI and by the dashboard.
Library modules only ever do ``logging.getLogger(__name__)``.

Structured context travels through ``extra=``.  The engine, for example,
logs each evaluation as::

    logger.debug("Evaluated selection", extra={"primary": "Strategic", ...})

Both formatters render those fields:

  text  ``2026-10-19T09:00:00Z [DEBUG] kpi_decision_map...: Evaluated selection primary=Strategic``
  json  ``{"ts": "...", "level": "DEBUG", "logger": "...", "msg": "...", "primary": "Strategic"}``
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from kpi_decision_map.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to ``record``, in insertion order."""
    return {
        key: val
        for key, val in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends ``key=value`` pairs for extra fields."""

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        self.converter = _utc_timetuple

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={_flat(val)}" for key, val in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ``ts``, ``level``, ``logger``, ``msg`` plus extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(record_context(record))
        return json.dumps(payload, default=str)


def _utc_timetuple(secs: Optional[float]):
    return datetime.fromtimestamp(secs or 0, tz=timezone.utc).timetuple()


def _flat(val: Any) -> str:
    if isinstance(val, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in val) or "-"
    return str(val)


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root logger from a ``LoggingConfig`` instance.

    Console output goes to stderr so ``--json`` reports on stdout stay
    parseable.  A file handler is added when ``config.log_file`` is set.

    Args:
        config: Logging configuration section from ``AppConfig``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter: logging.Formatter = JsonFormatter() if config.json_format else ContextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Streamlit's own loggers are chatty at INFO
    logging.getLogger("streamlit").setLevel(logging.WARNING)
