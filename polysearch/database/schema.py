"""
Database schema definitions for polysearch.

Defines the shared searchable table, its FTS5 shadow table and the
triggers that keep the two in sync. The table name comes from
configuration (``database.table_name``).
"""

import sqlite3
from typing import List

from ..core import get_config, get_logger, DatabaseError
from .connection import get_cursor, get_connection, get_db_manager

logger = get_logger(__name__)


def _table_names() -> tuple:
    """Return (table, fts_table) for the configured searchable table."""
    database = get_config().database
    return database.table_name, database.fts_table_name


def _rows_table_sql(table: str) -> str:
    return f"""
    CREATE TABLE IF NOT EXISTS {table} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        owner_type TEXT NOT NULL,
        owner_id INTEGER NOT NULL,
        parent_id INTEGER,
        value TEXT NOT NULL DEFAULT '',
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(owner_type, owner_id)
    )
    """


def _rows_indexes_sql(table: str) -> List[str]:
    return [
        f"CREATE INDEX IF NOT EXISTS idx_{table}_owner_type ON {table}(owner_type)",
        f"CREATE INDEX IF NOT EXISTS idx_{table}_parent_id ON {table}(parent_id)"
    ]


def _fts_table_sql(table: str, fts_table: str) -> str:
    """Generate FTS5 table creation SQL with configured tokenizer."""
    tokenizer = get_config().database.tokenizer

    return f"""
    CREATE VIRTUAL TABLE IF NOT EXISTS {fts_table} USING fts5(
        value,
        content='{table}',
        content_rowid='id',
        tokenize='{tokenizer}'
    )
    """


def _fts_triggers_sql(table: str, fts_table: str) -> List[str]:
    return [
        f"""
        CREATE TRIGGER IF NOT EXISTS {table}_ai AFTER INSERT ON {table} BEGIN
            INSERT INTO {fts_table}(rowid, value) VALUES (new.id, new.value);
        END
        """,
        f"""
        CREATE TRIGGER IF NOT EXISTS {table}_ad AFTER DELETE ON {table} BEGIN
            INSERT INTO {fts_table}({fts_table}, rowid, value)
            VALUES ('delete', old.id, old.value);
        END
        """,
        f"""
        CREATE TRIGGER IF NOT EXISTS {table}_au AFTER UPDATE ON {table} BEGIN
            INSERT INTO {fts_table}({fts_table}, rowid, value)
            VALUES ('delete', old.id, old.value);
            INSERT INTO {fts_table}(rowid, value) VALUES (new.id, new.value);
        END
        """
    ]


def init_schema() -> None:
    """
    Initialize database schema if not exists.

    Creates the searchable table, its indexes, the FTS5 virtual table
    and the sync triggers.
    """
    table, fts_table = _table_names()
    logger.info(f"Initializing schema for {table}")

    if not get_db_manager().fts5_available():
        raise DatabaseError(
            "SQLite was built without FTS5 support",
            {"sqlite_version": sqlite3.sqlite_version}
        )

    with get_cursor() as cur:
        cur.execute(_rows_table_sql(table))

        for index_sql in _rows_indexes_sql(table):
            cur.execute(index_sql)

        try:
            cur.execute(_fts_table_sql(table, fts_table))
        except sqlite3.OperationalError as e:
            if "already exists" not in str(e):
                raise DatabaseError(f"Failed to create FTS table: {e}", {"table": fts_table})

        for trigger_sql in _fts_triggers_sql(table, fts_table):
            try:
                cur.execute(trigger_sql)
            except sqlite3.OperationalError as e:
                if "already exists" not in str(e):
                    raise DatabaseError(f"Failed to create trigger: {e}", {"table": table})

    logger.info("Schema initialization complete")


def reset_schema() -> None:
    """
    Drop and recreate all tables.

    Warning: This deletes all indexed rows.
    """
    table, fts_table = _table_names()
    logger.warning(f"Resetting schema for {table} - all indexed rows will be deleted")

    with get_cursor() as cur:
        cur.execute(f"DROP TRIGGER IF EXISTS {table}_ai")
        cur.execute(f"DROP TRIGGER IF EXISTS {table}_ad")
        cur.execute(f"DROP TRIGGER IF EXISTS {table}_au")
        cur.execute(f"DROP TABLE IF EXISTS {fts_table}")
        cur.execute(f"DROP TABLE IF EXISTS {table}")

    init_schema()

    logger.info("Schema reset complete")


def get_statistics() -> dict:
    """
    Get index statistics.

    Returns:
        Dictionary with total row count and per-type counts.
    """
    table, _ = _table_names()

    with get_connection() as conn:
        stats = {}

        row = conn.execute(f"SELECT COUNT(*) as count FROM {table}").fetchone()
        stats["total_rows"] = row["count"]

        rows = conn.execute(
            f"SELECT owner_type, COUNT(*) as count FROM {table} GROUP BY owner_type ORDER BY owner_type"
        ).fetchall()
        stats["rows_by_type"] = {r["owner_type"]: r["count"] for r in rows}

        row = conn.execute(
            f"SELECT MIN(updated_at) as oldest, MAX(updated_at) as newest FROM {table}"
        ).fetchone()
        stats["oldest_update"] = row["oldest"]
        stats["newest_update"] = row["newest"]

    return stats
