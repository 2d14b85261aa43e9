"""
Tests for logging_manager module.

Tests the DiaristLogger file layout, the safe_logger function and the
NullLogger class that provide null-safe logging throughout the codebase,
and the CLI error helper.
"""
import pytest
import click
from unittest.mock import MagicMock

from diarist.core.logging_manager import (
    DiaristLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


@pytest.fixture
def file_logger(tmp_dir):
    """DiaristLogger writing into a temporary directory."""
    logger = DiaristLogger(tmp_dir / "logs", component_name="testcomp")
    yield logger
    logger.close()


class TestDiaristLogger:
    """Tests for DiaristLogger."""

    def test_creates_log_files(self, file_logger):
        """Component and error logs are created on setup."""
        assert (file_logger.log_dir / "testcomp.log").exists()
        assert (file_logger.log_dir / "errors.log").exists()

    def test_operation_written_as_json(self, file_logger):
        file_logger.log_operation("save_entry", {"entry_id": 3})
        for handler in file_logger.main_logger.handlers:
            handler.flush()

        text = (file_logger.log_dir / "testcomp.log").read_text(encoding="utf-8")
        assert 'OPERATION - save_entry: {"entry_id": 3}' in text

    def test_error_goes_to_error_log(self, file_logger):
        try:
            raise ValueError("broken")
        except ValueError as e:
            file_logger.log_error(e, {"operation": "test"})
        for handler in file_logger.error_logger.handlers:
            handler.flush()

        text = (file_logger.log_dir / "errors.log").read_text(encoding="utf-8")
        assert "ERROR - ValueError: broken" in text
        assert "Context: operation=test" in text

    def test_cli_error_format(self, file_logger):
        message = file_logger.log_cli_error(RuntimeError("nope"))
        assert message == "❌ RuntimeError: nope"

    def test_close_releases_handlers(self, tmp_dir):
        logger = DiaristLogger(tmp_dir, component_name="closing")
        logger.close()
        assert logger.main_logger.handlers == []
        assert logger.error_logger.handlers == []


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_are_no_ops(self):
        """NullLogger accepts every logging call without raising."""
        logger = NullLogger()
        logger.log_operation("test_op", {"key": "value"})
        logger.log_error(ValueError("test error"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_info("info message")
        logger.log_warning("warning message", {"key": "value"})

    def test_null_logger_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should return formatted error string."""
        result = NullLogger().log_cli_error(ValueError("test error"))
        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_safe_logger_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=DiaristLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_safe_logger_returns_null_logger_for_none(self):
        assert isinstance(safe_logger(None), NullLogger)


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_logs_echoes_and_exits(self, capsys):
        mock_logger = MagicMock(spec=DiaristLogger)
        mock_logger.log_cli_error.return_value = "❌ ValueError: bad"
        ctx = click.Context(click.Command("dummy"), obj={"logger": mock_logger})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ValueError("bad"), "write", {"entry_date": "2024-03-01"})

        assert exc_info.value.code == 1
        context = mock_logger.log_cli_error.call_args[0][1]
        assert context == {"operation": "write", "entry_date": "2024-03-01"}
        assert "❌ ValueError: bad" in capsys.readouterr().err

    def test_without_logger(self, capsys):
        ctx = click.Context(click.Command("dummy"), obj={})

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, KeyError("x"), "show")

        assert "KeyError" in capsys.readouterr().err
