"""
Core data models for worklogr.
"""

from worklogr.models.task import EntityState, Task
from worklogr.models.worklog import (
    LogEntry,
    Worklog,
    WorklogDay,
    WorklogExport,
    WorklogMonth,
    WorklogResult,
    WorklogWeek,
    WorklogYear,
    sorted_items,
)

__all__ = [
    "Task",
    "EntityState",
    "LogEntry",
    "Worklog",
    "WorklogDay",
    "WorklogWeek",
    "WorklogMonth",
    "WorklogYear",
    "WorklogResult",
    "WorklogExport",
    "sorted_items",
]
