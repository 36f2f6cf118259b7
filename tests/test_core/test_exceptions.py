"""
Tests for custom exception classes.

Tests exception creation, message formatting, and details handling.
"""

import pytest

from polysearch.core.exceptions import (
    FulltextSearchError,
    ConfigurationError,
    DatabaseError,
    UnknownTypeError
)


class TestFulltextSearchError:
    """Tests for base FulltextSearchError."""

    def test_basic_creation(self):
        """Test creating exception with just a message."""
        error = FulltextSearchError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_creation_with_details(self):
        """Test creating exception with details dict."""
        error = FulltextSearchError(
            "Table error",
            {"table": "fulltext_rows", "rows": 12}
        )

        assert error.message == "Table error"
        assert error.details["table"] == "fulltext_rows"
        assert error.details["rows"] == 12


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_is_subclass_of_base(self):
        """Test that ConfigurationError inherits from FulltextSearchError."""
        error = ConfigurationError("Config missing")

        assert isinstance(error, FulltextSearchError)

    def test_can_be_caught_as_base(self):
        """Test that ConfigurationError can be caught as FulltextSearchError."""
        with pytest.raises(FulltextSearchError):
            raise ConfigurationError("Test error")


class TestDatabaseError:
    """Tests for DatabaseError."""

    def test_database_error_message(self):
        """Test DatabaseError with database operation details."""
        error = DatabaseError(
            "Connection failed",
            {"database": "test.db", "operation": "connect"}
        )

        assert "Connection failed" in error.message
        assert error.details["operation"] == "connect"


class TestUnknownTypeError:
    """Tests for UnknownTypeError."""

    def test_with_type_name(self):
        """Test UnknownTypeError carries the offending type."""
        error = UnknownTypeError("No lookup registered", type_name="Article")

        assert error.type_name == "Article"
        assert error.message == "No lookup registered"

    def test_with_details(self):
        """Test UnknownTypeError with type name and details."""
        error = UnknownTypeError(
            "No lookup registered",
            type_name="Article",
            details={"registered": ["Comment"]}
        )

        assert error.details["registered"] == ["Comment"]
        assert isinstance(error, FulltextSearchError)
