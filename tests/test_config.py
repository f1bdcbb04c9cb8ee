"""Tests for configuration functionality."""

from datetime import datetime
from pathlib import Path

import pytest

from githistorylint.config import Config


def test_default_config():
    """Test default configuration values."""
    config = Config()
    assert config.package_manager == "npm"
    assert config.manifest == "package.json"
    assert config.scripts == ["lint", "test"]
    assert config.max_subject_length == 50
    assert config.max_body_line_length == 72
    assert config.strict_messages is False
    assert config.restore_on_failure is False
    assert config.always_log is False
    assert config.log_file is None


def test_config_load_nonexistent(tmp_path):
    """Test loading configuration when file doesn't exist."""
    config = Config.load(tmp_path)
    assert config.package_manager == "npm"  # Should use defaults


def test_config_load_and_save(tmp_path):
    """Test saving and loading configuration."""
    # Create a config with non-default values
    config = Config(
        package_manager="pnpm",
        scripts=["typecheck", "test"],
        max_subject_length=60,
        strict_messages=True,
        restore_on_failure=True,
        log_file="walk.log",
    )

    # Save it
    config.save(tmp_path)

    # Load it back
    loaded_config = Config.load(tmp_path)

    # Verify values
    assert loaded_config.package_manager == "pnpm"
    assert loaded_config.scripts == ["typecheck", "test"]
    assert loaded_config.max_subject_length == 60
    assert loaded_config.strict_messages is True
    assert loaded_config.restore_on_failure is True
    assert loaded_config.log_file == "walk.log"


def test_config_load_section(tmp_path):
    """Settings inside a [githistorylint] table are read too."""
    (tmp_path / ".githistorylint.toml").write_text(
        'package_manager = "yarn"\n'
        "\n"
        "[githistorylint]\n"
        'scripts = ["lint"]\n'
        "strict_messages = true\n"
    )

    config = Config.load(tmp_path)
    assert config.package_manager == "yarn"
    assert config.scripts == ["lint"]
    assert config.strict_messages is True


def test_config_load_sanitizes_strings(tmp_path):
    (tmp_path / ".githistorylint.toml").write_text('package_manager = "npm; rm -rf /"\n')
    config = Config.load(tmp_path)
    assert config.package_manager == "npm"


def test_config_load_unsafe_log_file(tmp_path):
    (tmp_path / ".githistorylint.toml").write_text('log_file = "../outside.log"\n')
    config = Config.load(tmp_path)
    assert config.log_file is None


def test_config_load_invalid(tmp_path):
    """Test loading invalid configuration file."""
    config_path = tmp_path / ".githistorylint.toml"

    # Write invalid TOML
    config_path.write_text("invalid [ toml")

    # Should get default config
    config = Config.load(tmp_path)
    assert config.package_manager == "npm"


def test_get_log_file_disabled():
    """Test get_log_file when logging is disabled."""
    config = Config(always_log=False, log_file=None)
    assert config.get_log_file() is None


def test_get_log_file_custom():
    """Test get_log_file with custom log file."""
    config = Config(always_log=False, log_file="custom.log")
    assert config.get_log_file() == Path("custom.log")


def test_get_log_file_unsafe():
    config = Config(log_file="/etc/passwd")
    assert config.get_log_file() is None


def test_get_log_file_nested_relative():
    assert Config(log_file="logs/walk.log").get_log_file() == Path("logs/walk.log")
    assert Config(log_file="logs/../../walk.log").get_log_file() is None


def test_get_log_file_always():
    """Test get_log_file with always_log enabled."""
    config = Config(always_log=True)
    log_file = config.get_log_file()

    assert log_file is not None
    assert log_file.name.startswith("ghl_log-")
    assert log_file.suffix == ".log"

    # Verify timestamp format
    timestamp_str = log_file.stem.split("-", 1)[1]
    try:
        datetime.strptime(timestamp_str, "%Y-%m-%d_%H-%M-%S")
    except ValueError:
        pytest.fail("Invalid timestamp format in log filename")


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("GIT_HISTORY_LINT_PACKAGE_MANAGER", "yarn")
    monkeypatch.setenv("GIT_HISTORY_LINT_SCRIPTS", "lint, build ,test")
    monkeypatch.setenv("GIT_HISTORY_LINT_STRICT_MESSAGES", "yes")
    monkeypatch.setenv("GIT_HISTORY_LINT_MAX_SUBJECT_LENGTH", "65")

    config = Config()
    assert config.package_manager == "yarn"
    assert config.scripts == ["lint", "build", "test"]
    assert config.strict_messages is True
    assert config.max_subject_length == 65


def test_explicit_values_override_environment(monkeypatch):
    monkeypatch.setenv("GIT_HISTORY_LINT_PACKAGE_MANAGER", "yarn")
    config = Config(package_manager="pnpm")
    assert config.package_manager == "pnpm"


def test_invalid_integer_environment_variable_is_ignored(monkeypatch, capsys):
    monkeypatch.setenv("GIT_HISTORY_LINT_MAX_BODY_LINE_LENGTH", "wide")
    monkeypatch.setenv("GIT_HISTORY_LINT_MAX_SUBJECT_LENGTH", " 60 ")

    config = Config()
    assert config.max_body_line_length == 72
    assert config.max_subject_length == 60
    assert "GIT_HISTORY_LINT_MAX_BODY_LINE_LENGTH" in capsys.readouterr().out
