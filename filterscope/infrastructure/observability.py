"""Structured Logging — filter-aware JSON records and one-shot logging setup.

Invariants:
    - Every record carries timestamp, level, logger and message
    - resource / filter_name / operator / error_code / path appear only when set
    - setup_logging() is idempotent: repeated calls replace the handler it installed
    - log_filter_error() is the one place a FilterScopeError becomes a log record

Design Decisions:
    - Standard logging + JSONFormatter: core modules log through plain
      logging.getLogger(__name__) and stay dependency-free
    - Values serialized with default=str so dates, UUIDs and Decimals in
      extras never break a log line
"""

import json
import logging
from datetime import datetime, timezone

from filterscope.core.errors import FilterScopeError


FILTER_FIELDS = ("resource", "filter_name", "operator", "error_code", "path")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "filterscope"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, fields: tuple[str, ...] = FILTER_FIELDS):
        super().__init__()
        self._fields = fields

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in self._fields
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the filterscope handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def log_filter_error(
    logger: logging.Logger, error: FilterScopeError, path: str | None = None,
) -> None:
    """Configuration defects (5xx) at ERROR, rejected user input at INFO."""
    level = logging.ERROR if error.http_status >= 500 else logging.INFO
    logger.log(
        level,
        f"{error.code}: {error.message}",
        extra={
            "resource": error.context.resource,
            "filter_name": error.context.filter_name,
            "operator": error.context.operator,
            "error_code": error.code,
            "path": path,
        },
    )
