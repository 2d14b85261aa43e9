"""Tests for database decorators."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import DiaristLogger
from diarist.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)


class FakeManager:
    """Minimal object carrying a logger like the real managers."""

    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("do_work")
    def do_work(self, value):
        return value * 2

    @log_database_operation("fail")
    def fail(self):
        raise ValueError("boom")

    @validate_metadata(["name", "color"])
    def create(self, metadata):
        return metadata["name"]

    @handle_db_errors
    def integrity(self):
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    @handle_db_errors
    def generic(self):
        raise SQLAlchemyError("disk I/O error")

    @handle_db_errors
    def invalid(self):
        raise ValidationError("bad input")


class TestLogDatabaseOperation:
    """Tests for log_database_operation."""

    def test_logs_start_and_completion(self):
        """Successful calls log a debug start and a completed operation."""
        mock_logger = MagicMock(spec=DiaristLogger)

        assert FakeManager(mock_logger).do_work(21) == 42

        mock_logger.log_debug.assert_called_once()
        assert "Starting do_work" in mock_logger.log_debug.call_args[0][0]
        mock_logger.log_operation.assert_called_once()
        name, details = mock_logger.log_operation.call_args[0]
        assert name == "do_work_completed"
        assert details["success"] is True

    def test_logs_error_and_reraises(self):
        """Failures are logged and propagate unchanged."""
        mock_logger = MagicMock(spec=DiaristLogger)

        with pytest.raises(ValueError, match="boom"):
            FakeManager(mock_logger).fail()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "fail"
        mock_logger.log_operation.assert_not_called()

    def test_works_without_logger(self):
        """A None logger is skipped silently."""
        assert FakeManager().do_work(1) == 2

    def test_preserves_function_metadata(self):
        """functools.wraps keeps the wrapped name."""
        assert FakeManager.do_work.__name__ == "do_work"


class TestValidateMetadata:
    """Tests for validate_metadata."""

    def test_passes_with_required_fields(self):
        assert FakeManager().create({"name": "a", "color": "#000000"}) == "a"

    def test_accepts_keyword_metadata(self):
        assert FakeManager().create(metadata={"name": "a", "color": "#000000"}) == "a"

    @pytest.mark.parametrize(
        "metadata", [{}, {"name": "a"}, {"name": "", "color": "#000000"}]
    )
    def test_missing_or_empty_field_rejected(self, metadata):
        with pytest.raises(ValidationError, match="missing or empty"):
            FakeManager().create(metadata)


class TestHandleDbErrors:
    """Tests for handle_db_errors."""

    def test_integrity_error_becomes_database_error(self):
        with pytest.raises(DatabaseError, match="Data integrity violation") as exc_info:
            FakeManager().integrity()
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_sqlalchemy_error_becomes_database_error(self):
        with pytest.raises(DatabaseError, match="Database operation failed"):
            FakeManager().generic()

    def test_other_exceptions_propagate(self):
        with pytest.raises(ValidationError, match="bad input"):
            FakeManager().invalid()
