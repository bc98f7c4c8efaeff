"""Tests for src/logging/audit.py — JSON logging."""

import json
import logging
import sys

from src.logging.audit import (
    JSONFormatter,
    RequestTimer,
    generate_request_id,
    get_audit_logger,
    request_id_var,
    setup_logging,
)


def _record(msg="test", **kwargs) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="",
        lineno=0, msg=msg, args=(), exc_info=kwargs.get("exc_info"),
    )


class TestJSONFormatter:

    def test_output_is_valid_json(self):
        parsed = json.loads(JSONFormatter().format(_record("hello")))
        assert parsed["message"] == "hello"
        assert parsed["level"] == "INFO"
        assert "timestamp" in parsed

    def test_includes_request_id(self):
        token = request_id_var.set("req-abc123")
        try:
            parsed = json.loads(JSONFormatter().format(_record()))
            assert parsed["request_id"] == "req-abc123"
        finally:
            request_id_var.reset(token)

    def test_includes_audit_data(self):
        record = _record()
        record.audit_data = {"operation": "get", "source_id": "abc"}
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["operation"] == "get"
        assert parsed["source_id"] == "abc"

    def test_empty_request_id_default(self):
        parsed = json.loads(JSONFormatter().format(_record()))
        assert parsed["request_id"] == ""

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())
        parsed = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exc_info"]


class TestGenerateRequestId:

    def test_length(self):
        assert len(generate_request_id()) == 12

    def test_uniqueness(self):
        ids = {generate_request_id() for _ in range(100)}
        assert len(ids) == 100


class TestRequestTimer:

    def test_measures_elapsed(self):
        with RequestTimer() as timer:
            _ = sum(range(1000))
        assert timer.elapsed_ms >= 0
        assert isinstance(timer.elapsed_ms, float)


class TestSetupLogging:

    def test_creates_stdout_handler(self, override_settings):
        override_settings(AUDIT_LOG_FILE="")
        setup_logging()
        logger = get_audit_logger()
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.propagate is False

    def test_adds_file_handler(self, override_settings, tmp_path):
        override_settings(AUDIT_LOG_FILE=str(tmp_path / "audit.log"), LOG_LEVEL="debug")
        setup_logging()
        logger = get_audit_logger()
        try:
            assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
            assert logger.level == logging.DEBUG
        finally:
            for h in logger.handlers:
                h.close()
            logger.handlers.clear()
