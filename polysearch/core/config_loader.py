"""
Configuration loader for polysearch.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

_IDENTIFIER = re.compile(r"^\w+$")

SUPPORTED_DIALECTS = ("sqlite", "mysql")


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    database_path: Path
    logs_directory: Path


@dataclass
class DatabaseConfig:
    """Configuration for the searchable table and its full-text engine."""
    table_name: str
    dialect: str
    tokenizer: str

    @property
    def fts_table_name(self) -> str:
        """Name of the FTS5 virtual table shadowing the searchable table."""
        return f"{self.table_name}_fts"


@dataclass
class SearchModeConfig:
    """Initial search mode flags."""
    advanced: bool
    and_search: bool
    phrase: bool
    match_some_wildcard: bool


@dataclass
class SearchConfig:
    """Configuration for search defaults."""
    default_limit: int
    per_page: int
    mode: SearchModeConfig


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    database: DatabaseConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            database_path=cls._resolve_path(paths_data.get("database_path", "output/search.db"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        db_data = data.get("database", {})
        database = DatabaseConfig(
            table_name=db_data.get("table_name", "fulltext_rows"),
            dialect=db_data.get("dialect", "sqlite").lower(),
            tokenizer=db_data.get("tokenizer", "unicode61")
        )

        if not _IDENTIFIER.match(database.table_name):
            raise ConfigurationError(
                f"Invalid table name: {database.table_name!r}",
                {"table_name": database.table_name}
            )

        if database.dialect not in SUPPORTED_DIALECTS:
            raise ConfigurationError(
                f"Unsupported dialect: {database.dialect!r}",
                {"supported": list(SUPPORTED_DIALECTS)}
            )

        search_data = data.get("search", {})
        mode_data = search_data.get("mode", {})
        search = SearchConfig(
            default_limit=search_data.get("default_limit", 10),
            per_page=search_data.get("per_page", 30),
            mode=SearchModeConfig(
                advanced=mode_data.get("advanced", False),
                and_search=mode_data.get("and_search", False),
                phrase=mode_data.get("phrase", False),
                match_some_wildcard=mode_data.get("match_some_wildcard", False)
            )
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        return cls(
            paths=paths,
            database=database,
            search=search,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Database path: {config.paths.database_path}")
        print(f"Table: {config.database.table_name} ({config.database.dialect})")
        print(f"Tokenizer: {config.database.tokenizer}")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
