"""
Custom exception hierarchy for polysearch.

Search-time input is normalized rather than rejected, so these cover
configuration problems, database setup failures and registry misses.
Driver errors raised while executing a search propagate unmodified.
"""


class FulltextSearchError(Exception):
    """Base exception for all polysearch errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FulltextSearchError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(FulltextSearchError):
    """Raised when connecting to or initializing the database fails."""
    pass


class UnknownTypeError(FulltextSearchError):
    """Raised when a search hit references a type with no registered lookup."""

    def __init__(self, message: str, type_name: str = None, details: dict = None):
        """
        Initialize unknown type error.

        Args:
            message: Error description.
            type_name: The unregistered owner type.
            details: Additional context.
        """
        super().__init__(message, details)
        self.type_name = type_name
