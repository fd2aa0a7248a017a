"""Structured logging tests."""

import json
import logging

from tripgate.infrastructure.observability import (
    JSONFormatter,
    _TripgateHandler,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "tripgate.test", logging.WARNING, __file__, 1, "upstream said %s", ("no",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "tripgate.test"
    assert log["message"] == "upstream said no"
    assert "timestamp" in log


def test_json_formatter_surfaces_extras():
    log = json.loads(JSONFormatter().format(
        _record(upstream="Gemini API", status_code=429, error_code="upstream_error"),
    ))
    assert log["upstream"] == "Gemini API"
    assert log["status_code"] == 429
    assert log["error_code"] == "upstream_error"


def test_json_formatter_skips_unknown_extras():
    log = json.loads(JSONFormatter().format(_record(api_key="secret")))
    assert "api_key" not in log


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [h for h in logging.root.handlers if isinstance(h, _TripgateHandler)]
    try:
        assert len(ours) == 1
        assert logging.root.level == logging.INFO
    finally:
        for handler in ours:
            logging.root.removeHandler(handler)
