"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, mock configurations, a configured
temporary database and small in-memory record types for materialization.
"""

import json
import pytest
import tempfile
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Generator

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="polysearch_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def config_data(temp_dir: Path) -> dict:
    """Raw config.json content pointing at temp paths."""
    output_dir = temp_dir / "output"
    output_dir.mkdir()

    logs_dir = output_dir / "logs"
    logs_dir.mkdir()

    return {
        "paths": {
            "database_path": str(output_dir / "test.db"),
            "logs_directory": str(logs_dir)
        },
        "database": {
            "table_name": "fulltext_rows",
            "dialect": "sqlite",
            "tokenizer": "unicode61"
        },
        "search": {
            "default_limit": 10,
            "per_page": 3,
            "mode": {
                "advanced": False,
                "and_search": False,
                "phrase": False,
                "match_some_wildcard": False
            }
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }


@pytest.fixture
def temp_config(temp_dir: Path, config_data: dict) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """
    Create path for a temporary database.

    Returns:
        Path where test database should be created.
    """
    return temp_dir / "test.db"


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from polysearch.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Detach package log handlers between tests.
    """
    from polysearch.core import logger
    logger.teardown_logging()
    yield
    logger.teardown_logging()


@pytest.fixture
def reset_db_singleton():
    """
    Reset the database manager singleton between tests.
    """
    from polysearch.database import connection
    connection._db_manager = None
    yield
    connection._db_manager = None


@pytest.fixture
def reset_search_singleton():
    """
    Reset the process-wide FulltextSearch instance between tests.
    """
    from polysearch.search import engine
    engine._default_search = None
    yield
    engine._default_search = None


@pytest.fixture
def configured_db(temp_config, reset_config_singleton, reset_db_singleton):
    """
    Set up a fully configured database using temp config.

    This fixture initializes config with temp paths and resets
    both config and db singletons, ready for schema operations.
    """
    from polysearch.core.config_loader import get_config
    get_config(temp_config)
    yield


@pytest.fixture
def indexed_db(configured_db):
    """Configured database with the schema created."""
    from polysearch.database.schema import init_schema
    init_schema()
    yield


@dataclass
class Record:
    """Minimal stand-in for an application record."""
    id: int
    title: str = ""


class RecordStore:
    """
    In-memory record store whose bulk lookup returns records in
    reverse id order, so tests catch any reliance on lookup order.
    """

    def __init__(self, ids=()):
        self.records = {i: Record(id=i, title=f"record {i}") for i in ids}
        self.calls = []

    def find_all_by_id(self, ids):
        self.calls.append(list(ids))
        found = [self.records[i] for i in set(ids) if i in self.records]
        return sorted(found, key=lambda r: r.id, reverse=True)


@pytest.fixture
def record_store_factory():
    """Build RecordStore instances holding the given ids."""
    return RecordStore
