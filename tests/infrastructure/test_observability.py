"""Structured Logging — JSON formatter fields and handler replacement."""

import json
import logging

from shipyard.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("shipyard.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = json.loads(JSONFormatter().format(_record(user_id="u1", listing_id="l1", unrelated="x")))
    assert line["message"] == "hello world"
    assert line["level"] == "INFO"
    assert line["user_id"] == "u1"
    assert line["listing_id"] == "l1"
    assert "unrelated" not in line


def test_setup_logging_replaces_its_own_handler():
    first = setup_logging("DEBUG", "json")
    second = setup_logging("INFO", "text")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(second)
