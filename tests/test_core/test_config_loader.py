"""
Tests for the configuration loader module.

Tests config loading, parsing, path resolution, and error handling.
"""

import json
import pytest
from pathlib import Path

from polysearch.core.config_loader import (
    Config,
    DatabaseConfig,
    PathsConfig,
    get_config,
    reload_config,
)
from polysearch.core.exceptions import ConfigurationError


class TestPathsConfig:
    """Tests for PathsConfig dataclass."""

    def test_paths_config_creation(self, temp_dir: Path):
        """Test creating PathsConfig with valid paths."""
        config = PathsConfig(
            database_path=temp_dir / "db.sqlite",
            logs_directory=temp_dir / "logs"
        )

        assert config.database_path == temp_dir / "db.sqlite"
        assert config.logs_directory == temp_dir / "logs"


class TestDatabaseConfig:
    """Tests for DatabaseConfig dataclass."""

    def test_fts_table_name_derived(self):
        """Test that the FTS table is named after the searchable table."""
        config = DatabaseConfig(table_name="search_rows", dialect="sqlite", tokenizer="unicode61")

        assert config.fts_table_name == "search_rows_fts"


class TestConfigFromFile:
    """Tests for loading config from file."""

    def test_load_valid_config(self, temp_config: Path, reset_config_singleton):
        """Test loading a valid configuration file."""
        config = Config.from_file(temp_config)

        assert config.database.table_name == "fulltext_rows"
        assert config.database.tokenizer == "unicode61"
        assert config.search.per_page == 3

    def test_load_missing_config_raises_error(self, temp_dir: Path):
        """Test that loading non-existent config raises ConfigurationError."""
        fake_path = temp_dir / "nonexistent" / "config.json"

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(fake_path)

        assert "not found" in str(exc_info.value.message).lower()

    def test_load_invalid_json_raises_error(self, temp_dir: Path):
        """Test that invalid JSON raises ConfigurationError."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text("{ invalid json }")

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(config_path)

        assert "invalid json" in str(exc_info.value.message).lower()

    def test_config_resolves_relative_paths(self, temp_dir: Path):
        """Test that relative paths are resolved against the project root."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"paths": {"database_path": "output/x.db"}}))

        config = Config.from_file(config_path)

        assert config.paths.database_path == temp_dir / "output" / "x.db"
        assert config.paths.logs_directory.is_absolute()

    def test_config_default_values(self, temp_dir: Path):
        """Test that missing config values get defaults."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"paths": {}, "search": {}}))

        config = Config.from_file(config_path)

        assert config.database.table_name == "fulltext_rows"
        assert config.database.dialect == "sqlite"
        assert config.search.default_limit == 10
        assert config.search.per_page == 30
        assert config.search.mode.advanced is False
        assert config.search.mode.match_some_wildcard is False

    def test_table_name_override(self, temp_dir: Path):
        """Test that the searchable table name can be overridden."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"database": {"table_name": "site_search"}}))

        config = Config.from_file(config_path)

        assert config.database.table_name == "site_search"
        assert config.database.fts_table_name == "site_search_fts"

    @pytest.mark.parametrize("table_name", ["rows; DROP TABLE x", "my-rows", ""])
    def test_invalid_table_name_rejected(self, temp_dir: Path, table_name):
        """Test that table names must be plain identifiers."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"database": {"table_name": table_name}}))

        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    def test_unknown_dialect_rejected(self, temp_dir: Path):
        """Test that only supported dialects are accepted."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"database": {"dialect": "oracle"}}))

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(config_path)

        assert "sqlite" in exc_info.value.details["supported"]


class TestGetConfig:
    """Tests for the get_config singleton function."""

    def test_get_config_returns_same_instance(self, temp_config: Path, reset_config_singleton):
        """Test that get_config returns singleton instance."""
        config1 = get_config(temp_config)
        config2 = get_config()

        assert config1 is config2

    def test_reload_config_creates_new_instance(self, temp_config: Path, reset_config_singleton):
        """Test that reload_config creates a fresh instance."""
        get_config(temp_config)

        with open(temp_config, "r") as f:
            data = json.load(f)
        data["search"]["mode"]["advanced"] = True
        with open(temp_config, "w") as f:
            json.dump(data, f)

        config2 = reload_config(temp_config)

        assert config2.search.mode.advanced is True

    def test_get_config_searches_upward(self, temp_config: Path, reset_config_singleton, monkeypatch):
        """Test that get_config finds config/config.json in a parent directory."""
        nested = temp_config.parent.parent / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = get_config()

        assert config.search.per_page == 3
