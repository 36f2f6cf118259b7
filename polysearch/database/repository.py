"""
Repository for rows of the shared searchable table.

This is the write side an owning record's persistence layer calls to keep
the search table in sync with its content. Searching only ever reads.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core import get_config, get_logger
from ..utils import camelize
from .connection import get_connection, get_cursor

logger = get_logger(__name__)


@dataclass
class FulltextRow:
    """One indexed record: at most one row per (owner_type, owner_id)."""
    id: int
    owner_type: str
    owner_id: int
    parent_id: Optional[int]
    value: str


class FulltextRowRepository:
    """
    Repository for searchable row upserts, deletes and lookups.

    Owner types are stored in canonical CamelCase form, the same form
    type filters are normalized to at search time.
    """

    def __init__(self, table_name: str = None):
        """
        Initialize the repository.

        Args:
            table_name: Searchable table name. Defaults to config value.
        """
        self.table = table_name or get_config().database.table_name

    def upsert(
        self,
        owner_type: Any,
        owner_id: int,
        value: str,
        parent_id: int = None
    ) -> int:
        """
        Insert or replace the row indexing one record.

        Args:
            owner_type: Type of the indexed record (name or class).
            owner_id: Identifier of the indexed record.
            value: Text blob to index.
            parent_id: Optional scoping key.

        Returns:
            Row ID of the inserted or updated row.
        """
        owner_type = camelize(owner_type)

        with get_cursor() as cur:
            cur.execute(f"""
                INSERT INTO {self.table} (owner_type, owner_id, parent_id, value)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(owner_type, owner_id) DO UPDATE SET
                    parent_id = excluded.parent_id,
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
            """, (owner_type, owner_id, parent_id, value or ""))

            row = cur.execute(
                f"SELECT id FROM {self.table} WHERE owner_type = ? AND owner_id = ?",
                (owner_type, owner_id)
            ).fetchone()

        return row["id"]

    def delete(self, owner_type: Any, owner_id: int) -> bool:
        """
        Remove the row indexing one record.

        Returns:
            True if a row was deleted.
        """
        with get_cursor() as cur:
            cur.execute(
                f"DELETE FROM {self.table} WHERE owner_type = ? AND owner_id = ?",
                (camelize(owner_type), owner_id)
            )
            return cur.rowcount > 0

    def delete_type(self, owner_type: Any) -> int:
        """
        Remove every row of one type.

        Returns:
            Number of rows deleted.
        """
        owner_type = camelize(owner_type)

        with get_cursor() as cur:
            cur.execute(f"DELETE FROM {self.table} WHERE owner_type = ?", (owner_type,))
            deleted = cur.rowcount

        if deleted > 0:
            logger.debug(f"Deleted {deleted} rows for type {owner_type}")

        return deleted

    def get(self, owner_type: Any, owner_id: int) -> Optional[FulltextRow]:
        """Fetch the row indexing one record, or None."""
        with get_connection() as conn:
            row = conn.execute(
                f"SELECT * FROM {self.table} WHERE owner_type = ? AND owner_id = ?",
                (camelize(owner_type), owner_id)
            ).fetchone()

        if row:
            return self._row_to_fulltext_row(row)
        return None

    def count(self) -> int:
        with get_connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) as count FROM {self.table}").fetchone()
            return row["count"]

    def count_by_type(self) -> Dict[str, int]:
        with get_connection() as conn:
            rows = conn.execute(
                f"SELECT owner_type, COUNT(*) as count FROM {self.table} GROUP BY owner_type"
            ).fetchall()
            return {row["owner_type"]: row["count"] for row in rows}

    @staticmethod
    def _row_to_fulltext_row(row) -> FulltextRow:
        """Convert a database row to a FulltextRow object."""
        return FulltextRow(
            id=row["id"],
            owner_type=row["owner_type"],
            owner_id=row["owner_id"],
            parent_id=row["parent_id"],
            value=row["value"]
        )
