"""Tests for layered settings."""

import json

import pytest

from conftest import write_file
from errors import ConfigError
from settings import Settings, default_config_path, load_settings, parse_config_file


class TestParseConfigFile:
    """Tests for reading config files by suffix."""

    def test_yaml(self, tmp_path):
        path = write_file(tmp_path / "config.yaml", "roam_db: /data/roam.db\nshow_all: true\n")

        assert parse_config_file(path) == {"roam_db": "/data/roam.db", "show_all": True}

    def test_toml(self, tmp_path):
        path = write_file(tmp_path / "config.toml", 'roam_db = "/data/roam.db"\nformat = "tree"\n')

        assert parse_config_file(path) == {"roam_db": "/data/roam.db", "format": "tree"}

    def test_json(self, tmp_path):
        path = write_file(tmp_path / "config.json", json.dumps({"exclude_unchanged": True}))

        assert parse_config_file(path) == {"exclude_unchanged": True}

    def test_empty_yaml(self, tmp_path):
        assert parse_config_file(write_file(tmp_path / "config.yaml", "")) == {}

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            parse_config_file(write_file(tmp_path / "config.yaml", "roam_db: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            parse_config_file(write_file(tmp_path / "config.yaml", "- a\n- b\n"))

    def test_unknown_suffix(self, tmp_path):
        with pytest.raises(ConfigError):
            parse_config_file(write_file(tmp_path / "config.ini", "[x]\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            parse_config_file(tmp_path / "nope.yaml")


class TestLoadSettings:
    """Tests for layering."""

    def test_defaults(self):
        assert load_settings() == Settings()

    def test_user_config_dir(self, tmp_path):
        path = write_file(tmp_path / "xdg" / "roamdeps" / "config.yaml", "show_all: true\n")

        assert default_config_path() == path
        assert load_settings().show_all is True

    def test_cli_overrides_file(self, tmp_path):
        path = write_file(tmp_path / "c.yaml", "roam_db: /from/file.db\nformat: json\n")

        settings = load_settings(path, {"roam_db": "/from/cli.db", "format": None})

        assert settings.roam_db == "/from/cli.db"
        assert settings.format == "json"

    def test_env_log_level(self, monkeypatch):
        monkeypatch.setenv("ROAMDEPS_LOG_LEVEL", "DEBUG")

        assert load_settings().log_level == "DEBUG"
        assert load_settings(cli_overrides={"log_level": "ERROR"}).log_level == "ERROR"

    def test_unknown_key(self, tmp_path):
        path = write_file(tmp_path / "c.yaml", "roam_database: /x.db\n")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)

        assert "roam_database" in str(exc_info.value)

    def test_bad_bool(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(write_file(tmp_path / "c.yaml", "show_all: sometimes\n"))

    def test_bad_format(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(write_file(tmp_path / "c.yaml", "format: mermaid\n"))

    def test_bad_log_level_type(self, tmp_path):
        """A non-string log level is a config error, not a crash later on."""
        with pytest.raises(ConfigError) as exc_info:
            load_settings(write_file(tmp_path / "c.yaml", "log_level: 10\n"))

        assert "log_level" in str(exc_info.value)

    def test_unknown_log_level(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(write_file(tmp_path / "c.yaml", "log_level: chatty\n"))

    def test_log_level_case_insensitive(self, tmp_path):
        settings = load_settings(write_file(tmp_path / "c.yaml", "log_level: info\n"))

        assert settings.log_level == "INFO"
