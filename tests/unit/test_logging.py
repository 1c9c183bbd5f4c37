"""
Tests for structured logging and request context propagation.
"""

import json
import logging
import sys

import pytest

from social_platform.shared.utils import logging as logging_utils
from social_platform.shared.utils.logging import (
    ContextualFormatter,
    JSONFormatter,
    get_logger,
    log_context,
    request_id_var,
    setup_logging,
    user_id_var,
)

_TUNED_LOGGERS = ("sqlalchemy.engine", "asyncio", "passlib")


def _record(message="Created post p-1"):
    return logging.LogRecord(
        name="social_platform.content",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestLogContext:
    """Identifiers are scoped to the block and reset afterwards."""

    def test_context_is_reset_after_the_block(self):
        with log_context(request_id="req-1", user_id="u-1") as request_id:
            assert request_id == "req-1"
            assert user_id_var.get() == "u-1"

        assert request_id_var.get() == ""
        assert user_id_var.get() == ""

    def test_request_id_is_generated_when_missing(self):
        with log_context() as request_id:
            assert request_id
            assert request_id_var.get() == request_id


class TestFormatters:
    """JSON and text output carry the request context."""

    def test_json_record_includes_context(self):
        formatter = JSONFormatter()

        with log_context(request_id="req-9", user_id="u-9"):
            payload = json.loads(formatter.format(_record()))

        assert payload["message"] == "Created post p-1"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "social_platform.content"
        assert payload["request_id"] == "req-9"
        assert payload["user_id"] == "u-9"
        assert payload["service"] == "social-platform"

    def test_json_record_omits_empty_context(self):
        payload = json.loads(JSONFormatter().format(_record()))

        assert "request_id" not in payload
        assert "correlation_id" not in payload

    def test_text_record_is_stamped(self):
        formatter = ContextualFormatter("%(service)s %(request_id)s %(levelname)s %(message)s")

        with log_context(request_id="req-3"):
            line = formatter.format(_record("hello"))

        assert line == "social-platform req-3 INFO hello"

    def test_get_logger_returns_the_named_logger(self):
        assert get_logger("social_platform.messaging") is logging.getLogger("social_platform.messaging")


@pytest.fixture
def fresh_logging(monkeypatch):
    """Let setup_logging run again and put the root logger back afterwards."""
    monkeypatch.setattr(logging_utils, "_logging_configured", False)
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    saved_levels = {name: logging.getLogger(name).level for name in _TUNED_LOGGERS}

    yield root

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)


class TestSetupLogging:
    """Root logger configuration at startup."""

    def test_text_output_goes_to_stdout(self, fresh_logging):
        startup = setup_logging(log_level="debug", log_format="text")

        assert startup.name == "startup"
        assert fresh_logging.level == logging.DEBUG
        [handler] = fresh_logging.handlers
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout
        assert isinstance(handler.formatter, ContextualFormatter)
        assert logging.getLogger("passlib").level == logging.ERROR
        assert logging.getLogger("asyncio").level == logging.WARNING

    def test_json_lines_are_written_to_the_log_file(self, fresh_logging, tmp_path):
        log_file = tmp_path / "logs" / "app.log"

        setup_logging(log_level="warning", log_format="json", log_file=str(log_file), enable_console=False)
        with log_context(request_id="req-7"):
            logging.getLogger("social_platform.content").warning("Feed query slow")
        logging.getLogger("social_platform.content").info("dropped below the level")
        for handler in fresh_logging.handlers:
            handler.flush()

        [line] = log_file.read_text().splitlines()
        payload = json.loads(line)
        assert payload["message"] == "Feed query slow"
        assert payload["level"] == "WARNING"
        assert payload["request_id"] == "req-7"

    def test_second_call_keeps_the_first_configuration(self, fresh_logging):
        setup_logging(log_level="info", log_format="text")
        handlers = fresh_logging.handlers[:]

        setup_logging(log_level="error", log_format="json")

        assert fresh_logging.handlers == handlers
        assert fresh_logging.level == logging.INFO
