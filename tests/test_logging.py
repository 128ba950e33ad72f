"""Tests for the structured JSON logger."""

import io
import json

import pytest

from wicalc.core.logging import LogRecord, StructuredLogger, get_logger, set_log_level


def _lines(buf: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in buf.getvalue().splitlines()]


def test_record_to_json():
    record = LogRecord(level="INFO", logger="t", message="hello", timestamp=1.0, data={"k": 2})
    assert json.loads(record.to_json()) == {
        "level": "INFO",
        "logger": "t",
        "message": "hello",
        "timestamp": 1.0,
        "k": 2,
    }


def test_threshold_filters_lower_levels():
    buf = io.StringIO()
    logger = StructuredLogger("t", output=buf, min_level="WARN")
    logger.info("skipped")
    logger.warn("kept", field="water pressure")
    lines = _lines(buf)
    assert len(lines) == 1
    assert lines[0]["level"] == "WARN"
    assert lines[0]["field"] == "water pressure"


def test_timer_logs_elapsed_at_debug():
    buf = io.StringIO()
    logger = StructuredLogger("t", output=buf, min_level="DEBUG")
    with logger.timer("parse"):
        pass
    (line,) = _lines(buf)
    assert line["message"] == "parse completed"
    assert line["elapsed_ms"] >= 0.0


def test_get_logger_is_cached():
    assert get_logger("wicalc.test") is get_logger("wicalc.test")


def test_set_log_level_updates_existing_and_new_loggers():
    existing = get_logger("wicalc.test.existing")
    set_log_level("debug")
    assert existing.level == "DEBUG"
    assert get_logger("wicalc.test.new").is_enabled_for("DEBUG")


def test_set_log_level_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown log level"):
        set_log_level("LOUD")


def test_default_output_is_stderr(capsys):
    logger = StructuredLogger("t", min_level="ERROR")
    logger.error("boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err)["message"] == "boom"
