"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from workmatch.config import (
    AppConfig,
    ConfigurationError,
    load_config,
    load_environment_config,
    validate_config_file,
)
from workmatch.config.environment import DEFAULT_DATABASE_URL
from workmatch.config.validators import check_for_warnings


def write_config(tmp_path: Path, body: str) -> Path:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(body)
    return config_file


class TestConfigurationLoading:
    def test_load_full_config(self, tmp_path):
        config_file = write_config(
            tmp_path,
            """
matching:
  min_score: 60
  max_results: 5
  include_unavailable_workers: true
logging:
  level: debug
  format: json
""",
        )

        with pytest.warns(UserWarning, match="include_unavailable_workers"):
            app_config, env_config = load_config(config_file)

        assert app_config.matching.min_score == 60
        assert app_config.matching.max_results == 5
        assert app_config.matching.include_unavailable_workers is True
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert env_config.database_url == DEFAULT_DATABASE_URL

    def test_defaults_when_no_file_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config == AppConfig()
        assert app_config.matching.min_score == 50
        assert app_config.matching.max_results == 10
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_finds_config_in_config_directory(self, tmp_path, monkeypatch):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("matching:\n  max_results: 3\n")
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config.matching.max_results == 3

    def test_empty_file_uses_defaults(self, tmp_path):
        app_config, _ = load_config(write_config(tmp_path, ""))
        assert app_config == AppConfig()

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = write_config(tmp_path, "matching: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(config_file)

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(write_config(tmp_path, "- a\n- b\n"))

    def test_out_of_range_threshold(self, tmp_path):
        config_file = write_config(tmp_path, "matching:\n  min_score: 150\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert any("matching -> min_score" in error for error in exc_info.value.errors)

    def test_invalid_type(self, tmp_path):
        config_file = write_config(tmp_path, "matching:\n  max_results: lots\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert any(error.startswith("Invalid type for 'matching -> max_results'") for error in exc_info.value.errors)

    def test_unknown_section(self, tmp_path):
        config_file = write_config(tmp_path, "sources: []\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert exc_info.value.errors == ["Unknown setting: sources"]

    def test_invalid_log_format(self, tmp_path):
        config_file = write_config(tmp_path, "logging:\n  format: xml\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file)

    def test_error_message_lists_errors_and_suggestions(self, tmp_path):
        config_file = write_config(tmp_path, "matching:\n  min_score: -1\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        message = str(exc_info.value)
        assert "Validation Errors:" in message
        assert "Suggestions:" in message


class TestWarnings:
    def test_high_threshold_warns(self):
        messages = check_for_warnings({"matching": {"min_score": 95}})
        assert len(messages) == 1
        assert "near-perfect" in messages[0]

    def test_large_cap_warns(self):
        messages = check_for_warnings({"matching": {"max_results": 80}})
        assert "max_results is 80" in messages[0]

    def test_defaults_do_not_warn(self):
        assert check_for_warnings({}) == []
        assert check_for_warnings({"matching": {"min_score": 50, "max_results": 10}}) == []

    def test_malformed_section_is_left_to_validation(self):
        assert check_for_warnings({"matching": "oops"}) == []


class TestEnvironmentConfig:
    def test_defaults(self):
        env_config = load_environment_config()

        assert env_config.database_url == DEFAULT_DATABASE_URL
        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:////tmp/other.db")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        env_config = load_environment_config()

        assert env_config.database_url == "sqlite:////tmp/other.db"
        assert env_config.log_level == "WARNING"
        assert env_config.environment == "staging"

    def test_invalid_values(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "workmatch.db")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2


class TestValidateConfigFile:
    def test_valid_file(self, tmp_path, capsys):
        assert validate_config_file(write_config(tmp_path, "matching:\n  min_score: 40\n")) is True
        assert "is valid" in capsys.readouterr().out

    def test_invalid_file(self, tmp_path, capsys):
        assert validate_config_file(write_config(tmp_path, "matching:\n  min_score: x\n")) is False
        assert "validation failed" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        assert validate_config_file(tmp_path / "nope.yaml") is False
