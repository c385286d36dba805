from __future__ import annotations

import json
import logging
import sys

from randomuser_mcp.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_COUNT = 25


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.count = EXPECTED_COUNT
    record.nationality = "GB"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["count"] == EXPECTED_COUNT
    assert payload["nationality"] == "GB"


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"results": EXPECTED_COUNT}

    payload = json.loads(_json_formatter(record))

    assert payload["results"] == EXPECTED_COUNT


def test_json_formatter_serializes_params_mapping() -> None:
    record = _record("[UPSTREAM CALL] single user")
    record.params = {"gender": "female", "nat": "GB"}

    payload = json.loads(JsonFormatter().format(record))

    assert payload["params"] == {"gender": "female", "nat": "GB"}
    assert payload["message"] == "[UPSTREAM CALL] single user"


def test_configure_logging_keeps_stdout_free(monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(root, "level", root.level)

    configure_logging(level="DEBUG", json_logs=True)

    (handler,) = root.handlers
    assert handler.stream is sys.stderr
    assert isinstance(handler.formatter, JsonFormatter)
