"""
worklogr Core Library

Builds browsable year/month/week/day worklogs from per-day task time tracking.
"""

__version__ = "0.1.0"

from worklogr.config import WorklogrConfig, load_config
from worklogr.services import WorklogService

__all__ = [
    "load_config",
    "WorklogrConfig",
    "WorklogService",
]
