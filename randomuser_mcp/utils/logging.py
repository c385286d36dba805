"""
Logging for the Random User MCP server.

Every upstream call, tool invocation and tool failure is logged with a bracketed
tag (`[UPSTREAM CALL 2/4]`, `[TOOL START]`, `[TOOL FAILED]`) and its context in
`extra=`: nationality, gender, count, parameter map, error code. The console
format shows the tag line; `LOG_JSON=true` switches to one JSON object per
record with every `extra=` key promoted to the top level.

Handlers write to stderr only. In `serve` mode stdout is the MCP channel and
a stray log line would corrupt it.

Usage:
    configure_logging(level="DEBUG", json_logs=True)
    log = get_logger(__name__)
    log.info("[UPSTREAM CALL] single user", extra={"params": {"nat": "GB"}})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    for key, value in vars(record).items():
        if key not in _STANDARD_ATTRS and key not in payload:
            payload[key] = value
    if hasattr(record, "extra") and isinstance(record.extra, dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; used when LOG_JSON is set."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Emit one JSON object per record instead of the console line format.
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level,
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module logger; handlers live on the root logger configured above."""
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
