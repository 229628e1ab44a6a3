"""Unit tests for structured logging setup."""

import json
import logging
import sys

import pytest

from kube_operator.observability.logging import (
    StructuredFormatter,
    setup_structured_logging,
)


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestStructuredFormatter:
    """Test cases for JSON log formatting."""

    def test_format_with_structured_fields(self):
        """Known extra fields are included in the JSON payload."""
        record = logging.LogRecord(
            "kube_operator.test", logging.INFO, __file__, 1, "resolved %s", ("dev",), None
        )
        record.api_server = "https://api"
        record.auth_method = "token"
        record.unrelated = "ignored"

        payload = json.loads(StructuredFormatter().format(record))

        assert payload["message"] == "resolved dev"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "kube_operator.test"
        assert payload["api_server"] == "https://api"
        assert payload["auth_method"] == "token"
        assert "unrelated" not in payload
        assert "timestamp" in payload

    def test_format_exception(self):
        """Exception info is rendered into the payload."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        payload = json.loads(StructuredFormatter().format(record))
        assert "RuntimeError: boom" in payload["exception"]


class TestSetupStructuredLogging:
    """Test cases for setup_structured_logging."""

    def test_json_handler_installed(self, restore_root_logger):
        """A single JSON handler is installed at the requested level."""
        setup_structured_logging(log_level="debug")

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)
        assert restore_root_logger.level == logging.DEBUG
        assert logging.getLogger("kubernetes").level == logging.WARNING

    def test_plain_formatter(self, restore_root_logger):
        """JSON formatting can be disabled."""
        setup_structured_logging(log_level="WARNING", enable_json_formatting=False)

        formatter = restore_root_logger.handlers[0].formatter
        assert not isinstance(formatter, StructuredFormatter)
        assert restore_root_logger.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self, restore_root_logger):
        """An unknown level name falls back to INFO."""
        setup_structured_logging(log_level="chatty")
        assert restore_root_logger.level == logging.INFO
