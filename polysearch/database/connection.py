"""
SQLite connections for the searchable table.

Searches open short-lived read-only connections (``PRAGMA query_only``);
the repository and schema code write through ``get_cursor``. WAL
journaling lets readers run while the owning application writes.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from ..core import get_config, get_logger, DatabaseError

logger = get_logger(__name__)


class DatabaseManager:
    """
    Opens configured SQLite connections to the search database.

    Every connection is opened per use and closed on exit; nothing is
    pooled or cached between calls.
    """

    def __init__(self, db_path: Path = None, timeout: float = 30.0):
        """
        Initialize database manager.

        Args:
            db_path: Path to the SQLite file. Defaults to config value.
            timeout: Seconds to wait on a locked database.
        """
        if db_path is None:
            db_path = get_config().paths.database_path
        self.db_path = Path(db_path)
        self.timeout = timeout

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _open(self, read_only: bool = False) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False, timeout=self.timeout)
            conn.row_factory = sqlite3.Row

            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            if read_only:
                conn.execute("PRAGMA query_only=ON")

            return conn

        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to connect to database: {e}",
                {"path": str(self.db_path), "read_only": read_only}
            )

    @contextmanager
    def connection(self, read_only: bool = False) -> Generator[sqlite3.Connection, None, None]:
        """
        Open a connection for the duration of the block.

        Args:
            read_only: Reject writes on this connection.

        Yields:
            SQLite connection with Row factory enabled.
        """
        conn = self._open(read_only)
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def cursor(self, commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
        """
        Open a write cursor, committing on success and rolling back on error.

        Args:
            commit: Whether to commit on successful exit.

        Yields:
            SQLite cursor.
        """
        conn = self._open()
        cur = conn.cursor()

        try:
            yield cur
            if commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
            conn.close()

    def fts5_available(self) -> bool:
        """Whether this SQLite build can create FTS5 tables."""
        with self.connection() as conn:
            try:
                conn.execute("CREATE VIRTUAL TABLE temp.fts5_probe USING fts5(x)")
                conn.execute("DROP TABLE temp.fts5_probe")
            except sqlite3.OperationalError:
                return False
        return True


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get the singleton DatabaseManager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
        logger.debug(f"Using database at {_db_manager.db_path}")
    return _db_manager


@contextmanager
def get_connection(read_only: bool = False) -> Generator[sqlite3.Connection, None, None]:
    """Connection from the shared manager. See DatabaseManager.connection."""
    with get_db_manager().connection(read_only=read_only) as conn:
        yield conn


@contextmanager
def get_read_connection() -> Generator[sqlite3.Connection, None, None]:
    """Read-only connection, the default connection factory for searches."""
    with get_db_manager().connection(read_only=True) as conn:
        yield conn


@contextmanager
def get_cursor(commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
    """Write cursor from the shared manager. See DatabaseManager.cursor."""
    with get_db_manager().cursor(commit=commit) as cur:
        yield cur
