"""
Tests for worklogr configuration.
"""

import pytest
from pathlib import Path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove worklogr overrides from the environment."""
    for name in ("WORKLOGR_MERGE_PRECEDENCE", "WORKLOGR_FIRST_DAY_OF_WEEK", "WORKLOGR_MIN_TIME_TO_SUBMIT_MS"):
        monkeypatch.delenv(name, raising=False)


def test_default_config():
    """Test default configuration values."""
    from worklogr.config import WorklogrConfig

    config = WorklogrConfig()

    assert config.merge_precedence == "archived"
    assert config.first_day_of_week is None
    assert config.submission.min_time_to_submit_ms == 60000


def test_load_config_without_file():
    """Test loading config when no file exists."""
    from worklogr.config import load_config

    config = load_config(Path("/nonexistent/config.yaml"))

    assert config.merge_precedence == "archived"


def test_load_config_from_file(temp_config_dir):
    """Test settings are read from YAML."""
    from worklogr.config import load_config

    config_file = temp_config_dir / "config.yaml"
    config_file.write_text(
        "worklog:\n"
        "  merge_precedence: live\n"
        "  first_day_of_week: sunday\n"
        "submission:\n"
        "  min_time_to_submit_ms: 120000\n"
    )

    config = load_config(config_file)

    assert config.merge_precedence == "live"
    assert config.first_day_of_week == 6
    assert config.submission.min_time_to_submit_ms == 120000


def test_load_config_invalid_yaml(temp_config_dir):
    """Test broken YAML falls back to defaults."""
    from worklogr.config import load_config

    config_file = temp_config_dir / "config.yaml"
    config_file.write_text("worklog: [unclosed\n")

    config = load_config(config_file)

    assert config.merge_precedence == "archived"


def test_load_config_invalid_value(temp_config_dir):
    """Test invalid precedence falls back to defaults."""
    from worklogr.config import load_config

    config_file = temp_config_dir / "config.yaml"
    config_file.write_text("worklog:\n  merge_precedence: newest\n")

    config = load_config(config_file)

    assert config.merge_precedence == "archived"


def test_load_config_with_env_override(monkeypatch):
    """Test environment variable overrides."""
    from worklogr.config import load_config

    monkeypatch.setenv("WORKLOGR_MERGE_PRECEDENCE", "LIVE")
    monkeypatch.setenv("WORKLOGR_FIRST_DAY_OF_WEEK", "mon")
    monkeypatch.setenv("WORKLOGR_MIN_TIME_TO_SUBMIT_MS", "30000")

    config = load_config(Path("/nonexistent/config.yaml"))

    assert config.merge_precedence == "live"
    assert config.first_day_of_week == 0
    assert config.submission.min_time_to_submit_ms == 30000


def test_bad_env_override_ignored(monkeypatch):
    """Test invalid environment values are ignored."""
    from worklogr.config import load_config

    monkeypatch.setenv("WORKLOGR_MERGE_PRECEDENCE", "newest")
    monkeypatch.setenv("WORKLOGR_FIRST_DAY_OF_WEEK", "someday")
    monkeypatch.setenv("WORKLOGR_MIN_TIME_TO_SUBMIT_MS", "lots")

    config = load_config(Path("/nonexistent/config.yaml"))

    assert config.merge_precedence == "archived"
    assert config.first_day_of_week is None
    assert config.submission.min_time_to_submit_ms == 60000


@pytest.mark.parametrize("value,expected", [
    (None, None), ("", None), ("none", None), (0, 0), ("3", 3), ("Friday", 4), ("sun", 6),
])
def test_parse_first_day_of_week(value, expected):
    """Test weekday parsing."""
    from worklogr.config import parse_first_day_of_week

    assert parse_first_day_of_week(value) == expected


def test_parse_first_day_of_week_invalid():
    """Test out of range weekdays are rejected."""
    from worklogr.config import parse_first_day_of_week

    with pytest.raises(ValueError):
        parse_first_day_of_week(7)


def test_save_and_reload(temp_config_dir):
    """Test a saved config loads back identically."""
    from worklogr.config import WorklogrConfig, load_config, save_config

    config = WorklogrConfig()
    config.worklog.merge_precedence = "live"
    config.worklog.first_day_of_week = 0
    config_file = temp_config_dir / "config.yaml"

    save_config(config, config_file)
    loaded = load_config(config_file)

    assert loaded.to_dict() == config.to_dict()
    assert oct(config_file.stat().st_mode & 0o777) == oct(0o600)


def test_get_config_is_cached(monkeypatch, tmp_path):
    """Test get_config caches until reload_config is called."""
    import worklogr.config as config_module

    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.yaml")
    monkeypatch.setattr(config_module, "_config", None)

    first = config_module.get_config()
    assert config_module.get_config() is first

    reloaded = config_module.reload_config()
    assert reloaded is not first
    assert config_module.get_config() is reloaded
