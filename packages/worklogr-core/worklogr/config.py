"""
worklogr Configuration

Loads settings from ~/.worklogr/config.yaml with environment variable overrides.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import os
import logging

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".worklogr"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def parse_first_day_of_week(value) -> Optional[int]:
    """
    Parse a weekday setting into 0 (Monday) .. 6 (Sunday).

    Accepts weekday names, their first three letters, or integers.
    Empty values and "none" disable calendar-aligned weeks.
    """
    if value is None or value == "":
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        day = value
    else:
        text = str(value).strip().lower()
        if text in ("none", "null"):
            return None
        if text.isdigit():
            day = int(text)
        else:
            matches = [i for i, name in enumerate(WEEKDAYS) if name == text or name[:3] == text]
            if not matches:
                raise ValueError(
                    f"Invalid first_day_of_week '{value}'. Must be one of: {', '.join(WEEKDAYS)}"
                )
            day = matches[0]

    if not 0 <= day <= 6:
        raise ValueError(f"Invalid first_day_of_week {value!r}. Must be between 0 and 6")
    return day


@dataclass
class WorklogConfig:
    """Aggregation settings."""

    merge_precedence: str = "archived"  # "archived" or "live"
    first_day_of_week: Optional[int] = None  # None: plain 7-day weeks from day 1


@dataclass
class SubmissionConfig:
    """Issue-tracker submission settings."""

    min_time_to_submit_ms: int = 60000


@dataclass
class WorklogrConfig:
    """
    Complete worklogr configuration.

    Loaded from ~/.worklogr/config.yaml with environment variable overrides.
    """

    worklog: WorklogConfig = field(default_factory=WorklogConfig)
    submission: SubmissionConfig = field(default_factory=SubmissionConfig)

    # Convenience accessors
    @property
    def merge_precedence(self) -> str:
        return self.worklog.merge_precedence

    @property
    def first_day_of_week(self) -> Optional[int]:
        return self.worklog.first_day_of_week

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return asdict(self)


def _parse_worklog_config(data: dict) -> WorklogConfig:
    """Parse worklog configuration from YAML data."""
    worklog_data = data.get("worklog") or {}

    precedence = str(worklog_data.get("merge_precedence", "archived")).lower()
    if precedence not in ("archived", "live"):
        raise ValueError(f"Invalid merge_precedence '{precedence}'. Must be one of: archived, live")

    return WorklogConfig(
        merge_precedence=precedence,
        first_day_of_week=parse_first_day_of_week(worklog_data.get("first_day_of_week")),
    )


def _parse_submission_config(data: dict) -> SubmissionConfig:
    """Parse submission configuration from YAML data."""
    submission_data = data.get("submission") or {}

    return SubmissionConfig(
        min_time_to_submit_ms=int(submission_data.get("min_time_to_submit_ms", 60000)),
    )


def load_config(config_path: Optional[Path] = None) -> WorklogrConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.worklogr/config.yaml

    Returns:
        WorklogrConfig instance
    """
    config_file = config_path or CONFIG_FILE
    config = WorklogrConfig()

    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            config.worklog = _parse_worklog_config(data)
            config.submission = _parse_submission_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Invalid settings in {config_file}: {e}")

    # Environment variable overrides
    if os.environ.get("WORKLOGR_MERGE_PRECEDENCE"):
        precedence = os.environ["WORKLOGR_MERGE_PRECEDENCE"].lower()
        if precedence in ("archived", "live"):
            config.worklog.merge_precedence = precedence
        else:
            logger.warning(f"Ignoring WORKLOGR_MERGE_PRECEDENCE={precedence!r}")

    if os.environ.get("WORKLOGR_FIRST_DAY_OF_WEEK"):
        try:
            config.worklog.first_day_of_week = parse_first_day_of_week(
                os.environ["WORKLOGR_FIRST_DAY_OF_WEEK"]
            )
        except ValueError as e:
            logger.warning(f"Ignoring WORKLOGR_FIRST_DAY_OF_WEEK: {e}")

    if os.environ.get("WORKLOGR_MIN_TIME_TO_SUBMIT_MS"):
        try:
            config.submission.min_time_to_submit_ms = int(os.environ["WORKLOGR_MIN_TIME_TO_SUBMIT_MS"])
        except ValueError:
            logger.warning("Ignoring non-numeric WORKLOGR_MIN_TIME_TO_SUBMIT_MS")

    return config


def save_config(config: WorklogrConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: WorklogrConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.worklogr/config.yaml
    """
    config_file = config_path or CONFIG_FILE

    # Ensure config directory exists
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "worklog": {
            "merge_precedence": config.worklog.merge_precedence,
        },
        "submission": {
            "min_time_to_submit_ms": config.submission.min_time_to_submit_ms,
        },
    }

    if config.worklog.first_day_of_week is not None:
        data["worklog"]["first_day_of_week"] = WEEKDAYS[config.worklog.first_day_of_week]

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    config_file.chmod(0o600)

    logger.info(f"Configuration saved to {config_file}")


# Cached config instance
_config: Optional[WorklogrConfig] = None


def get_config() -> WorklogrConfig:
    """Get cached config instance, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> WorklogrConfig:
    """Force reload config from file."""
    global _config
    _config = load_config()
    return _config
