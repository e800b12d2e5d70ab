"""Tests for structured logging configuration."""

import json
import logging
from pathlib import Path
from unittest.mock import Mock

import pytest
import structlog

import okta_paging
from okta_paging.config.logging_config import (
    LoggingContextManager,
    add_app_context,
    configure_logging,
    filter_sensitive_data,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default structlog and root logger state after each test."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestLoggingProcessors:
    """Test custom logging processors."""

    def test_add_app_context(self) -> None:
        """Test application context processor."""
        result = add_app_context(None, "info", {"event": "test"})

        assert result["app"] == "okta_paging"
        assert result["version"] == okta_paging.__version__
        assert result["event"] == "test"

    def test_filter_sensitive_data(self) -> None:
        """Test credentials are redacted at any depth."""
        event_dict = {
            "event": "request",
            "url": "https://example.okta.com/api/v1/users",
            "token": "secret_token_123",
            "headers": {
                "Authorization": "SSWS secret",
                "Accept": "application/json",
            },
            "list_data": [
                {"api_key": "list_secret", "value": "normal"},
                "normal_string",
            ],
        }

        result = filter_sensitive_data(None, "info", event_dict)

        assert result["token"] == "[REDACTED]"
        assert result["headers"]["Authorization"] == "[REDACTED]"
        assert result["list_data"][0]["api_key"] == "[REDACTED]"

        assert result["url"] == "https://example.okta.com/api/v1/users"
        assert result["headers"]["Accept"] == "application/json"
        assert result["list_data"][0]["value"] == "normal"
        assert result["list_data"][1] == "normal_string"

    def test_pagination_fields_are_kept(self) -> None:
        """Test pagination log fields are not mistaken for secrets."""
        event_dict = {"next_url": "https://a?after=1", "has_next_page": True}

        assert filter_sensitive_data(None, "debug", event_dict) == event_dict


class TestLoggingConfiguration:
    """Test logging configuration setup."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON lines are written to stderr."""
        configure_logging(log_level="INFO", log_format="json")

        structlog.get_logger("test").info("page fetched", page=1, token="secret_token_123")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "page fetched"
        assert entry["page"] == 1
        assert entry["token"] == "[REDACTED]"
        assert entry["app"] == "okta_paging"
        assert entry["level"] == "info"

    def test_text_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test console output for development."""
        configure_logging(log_level="DEBUG", log_format="text")

        structlog.get_logger("test").debug("debug message", extra_field="test_value")

        output = capsys.readouterr().err
        assert "debug message" in output
        assert "test_value" in output

    def test_log_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that records below the configured level are dropped."""
        configure_logging(log_level="WARNING", log_format="json")
        logger = structlog.get_logger("test")

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")

        output = capsys.readouterr().err
        assert "Debug message" not in output
        assert "Info message" not in output
        assert "Warning message" in output

    def test_file_output(self, tmp_path: Path) -> None:
        """Test logging to a file creates parent directories."""
        log_file = tmp_path / "logs" / "okta.log"

        configure_logging(log_level="INFO", log_format="json", log_file=log_file)
        structlog.get_logger("test").info("test file logging", test_field="test_value")

        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip().splitlines()[0])
        assert entry["event"] == "test file logging"
        assert entry["test_field"] == "test_value"


class TestLoggingContextManager:
    """Test logging context manager."""

    def test_binds_context(self) -> None:
        """Test the bound logger is returned on entry."""
        logger = Mock()

        with LoggingContextManager(logger, operation="list_users") as bound:
            assert bound is logger.bind.return_value

        logger.bind.assert_called_once_with(operation="list_users")
        logger.bind.return_value.error.assert_not_called()

    def test_logs_exception(self) -> None:
        """Test exceptions inside the block are logged and re-raised."""
        logger = Mock()

        with pytest.raises(ValueError):
            with LoggingContextManager(logger, operation="list_users"):
                raise ValueError("Test exception")

        bound = logger.bind.return_value
        bound.error.assert_called_once()
        assert bound.error.call_args.kwargs["exc_type"] == "ValueError"
        assert bound.error.call_args.kwargs["exc_message"] == "Test exception"
