"""Structured Logging — formatters surface quote extras; setup is idempotent."""

import json
import logging

import pytest

from shipquote.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "shipquote.test", logging.WARNING, __file__, 1, "served fallback", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(
        _record(degraded_reason="calculation_failed", cache_key="10-MD-212"),
    )
    log = json.loads(line)
    assert log["level"] == "WARNING"
    assert log["logger"] == "shipquote.test"
    assert log["message"] == "served fallback"
    assert log["degraded_reason"] == "calculation_failed"
    assert log["cache_key"] == "10-MD-212"


def test_json_formatter_skips_unset_and_unknown_fields():
    log = json.loads(JSONFormatter().format(_record(unrelated="x")))
    assert "unrelated" not in log
    assert "cache_key" not in log


def test_text_formatter_appends_extras_as_key_value():
    line = TextFormatter().format(_record(cache_key="10-MD-212", weight_oz=10.0))
    assert "WARNING shipquote.test - served fallback" in line
    assert line.endswith("cache_key=10-MD-212 weight_oz=10.0")


def test_text_formatter_without_extras_is_plain():
    line = TextFormatter().format(_record())
    assert line.endswith("served fallback")


# ─── setup_logging ───────────────────────────────────────────────

@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)


def test_setup_logging_twice_keeps_one_handler(root_logger):
    before = len(root_logger.handlers)
    first = setup_logging("INFO", "json")
    second = setup_logging("DEBUG", "text")
    assert first not in root_logger.handlers
    assert second in root_logger.handlers
    assert len(root_logger.handlers) == before + 1
    assert isinstance(second.formatter, TextFormatter)
    assert root_logger.level == logging.DEBUG


def test_setup_logging_leaves_foreign_handlers(root_logger):
    foreign = logging.NullHandler()
    root_logger.addHandler(foreign)
    setup_logging("WARNING", "json")
    assert foreign in root_logger.handlers
