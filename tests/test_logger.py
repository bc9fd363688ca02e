"""
Tests for the JSON logger backend.
"""

import json
import logging
import re
import pytest
from opentelemetry.trace import SpanContext, TraceFlags

from unified_monitoring.adapters.impl.json_logger import (
    InvalidLogLevel,
    JSONLogger,
    parse_level,
)


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "service.log"


def read_entries(path):
    """Read JSON log entries from a file."""
    with open(path, 'r') as f:
        return [json.loads(line) for line in f if line.strip()]


class TestParseLevel:
    """Test log level parsing."""

    @pytest.mark.parametrize("name,level", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("", logging.INFO),
        (None, logging.INFO),
        ("warn", logging.WARNING),
        ("Warning", logging.WARNING),
        ("error", logging.ERROR),
        ("fatal", logging.CRITICAL),
    ])
    def test_valid_levels(self, name, level):
        assert parse_level(name) == level

    @pytest.mark.parametrize("name", ["verbose", "trace", "critical"])
    def test_invalid_levels(self, name):
        with pytest.raises(InvalidLogLevel):
            parse_level(name)


class TestJSONLogger:
    """Test JSON log output."""

    def test_entry_format(self, log_path):
        logger = JSONLogger(level="info", output_path=str(log_path), name="svc")

        logger.info("Request completed", {"status_code": 200, "duration_ms": 12.5})
        logger.flush()

        entries = read_entries(log_path)
        assert len(entries) == 1
        entry = entries[0]
        assert entry["message"] == "Request completed"
        assert entry["level"] == "info"
        assert entry["logger"] == "svc"
        assert entry["status_code"] == 200
        assert entry["duration_ms"] == 12.5
        assert re.match(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{2}:\d{2}$", entry["timestamp"])

    def test_level_filtering(self, log_path):
        logger = JSONLogger(level="warn", output_path=str(log_path))

        logger.debug("hidden")
        logger.info("hidden")
        logger.warn("shown")
        logger.error("shown too")
        logger.flush()

        levels = [entry["level"] for entry in read_entries(log_path)]
        assert levels == ["warn", "error"]

    def test_fields_do_not_replace_entry_keys(self, log_path):
        logger = JSONLogger(output_path=str(log_path))

        logger.info("real message", {"message": "spoofed", "user": "alice"})
        logger.flush()

        entry = read_entries(log_path)[0]
        assert entry["message"] == "real message"
        assert entry["user"] == "alice"

    def test_stdout_output(self, capsys):
        logger = JSONLogger(level="debug")

        logger.debug("to stdout")
        logger.flush()

        entry = json.loads(capsys.readouterr().out.strip())
        assert entry["message"] == "to stdout"
        assert entry["level"] == "debug"

    def test_invalid_level_rejected(self, log_path):
        with pytest.raises(InvalidLogLevel):
            JSONLogger(level="loud", output_path=str(log_path))

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(OSError):
            JSONLogger(output_path=str(tmp_path / "missing" / "service.log"))

    def test_set_log_level(self, log_path):
        logger = JSONLogger(level="error", output_path=str(log_path))

        logger.set_log_level("debug")
        logger.debug("now visible")
        logger.flush()

        assert read_entries(log_path)[0]["message"] == "now visible"

    def test_set_invalid_log_level_falls_back_to_info(self, log_path):
        logger = JSONLogger(level="debug", output_path=str(log_path))

        logger.set_log_level("loud")
        logger.debug("hidden")
        logger.flush()

        entries = read_entries(log_path)
        assert logger.level == logging.INFO
        assert [entry["message"] for entry in entries] == [
            "Invalid log level: loud, defaulting to INFO"
        ]

    def test_fatal_exits(self, log_path):
        logger = JSONLogger(output_path=str(log_path))

        with pytest.raises(SystemExit) as exc_info:
            logger.fatal("unrecoverable")

        assert exc_info.value.code == 1
        assert read_entries(log_path)[0]["level"] == "fatal"

    def test_with_span_context(self, log_path):
        logger = JSONLogger(output_path=str(log_path))
        span_context = SpanContext(
            trace_id=0x0AF7651916CD43DD8448EB211C80319C,
            span_id=0xB7AD6B7169203331,
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED)
        )

        traced = logger.with_span_context(span_context)
        traced.info("correlated")
        logger.info("plain")
        logger.flush()

        correlated, plain = read_entries(log_path)
        assert correlated["trace_id"] == "0af7651916cd43dd8448eb211c80319c"
        assert correlated["span_id"] == "b7ad6b7169203331"
        assert "trace_id" not in plain

    def test_derived_logger_shares_level(self, log_path):
        logger = JSONLogger(output_path=str(log_path))
        traced = logger.with_span_context(SpanContext(1, 1, is_remote=False))

        logger.set_log_level("error")

        assert traced.level == logging.ERROR

    def test_flush_on_unset_logger(self):
        JSONLogger.__new__(JSONLogger).flush()

    def test_close_releases_file(self, log_path):
        logger = JSONLogger(output_path=str(log_path))
        stream = logger._logger.handlers[0].stream

        logger.info("before close")
        logger.close()
        logger.close()

        assert stream.closed
        assert read_entries(log_path)[0]["message"] == "before close"

    def test_close_keeps_stdout_open(self, capsys):
        logger = JSONLogger()

        logger.close()
        print("still writable")

        assert capsys.readouterr().out == "still writable\n"

    def test_close_on_unset_logger(self):
        JSONLogger.__new__(JSONLogger).close()
