"""
Database module for SQLite persistence with FTS5 full-text search.

Provides connection management, the searchable table schema and the
repository owners use to keep it in sync.
"""

from .connection import get_connection, get_read_connection, get_cursor, get_db_manager, DatabaseManager
from .schema import init_schema, reset_schema, get_statistics
from .repository import FulltextRow, FulltextRowRepository

__all__ = [
    "get_connection",
    "get_read_connection",
    "get_db_manager",
    "get_cursor",
    "DatabaseManager",
    "init_schema",
    "reset_schema",
    "get_statistics",
    "FulltextRow",
    "FulltextRowRepository"
]
