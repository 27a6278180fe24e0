"""
Worklog services for worklogr.
"""

from worklogr.services.archive import MergePrecedence, map_archive_to_worklog, merge_entity_states
from worklogr.services.export import create_tasks_for_day, create_tasks_for_range, export_range
from worklogr.services.submission import mark_as_tracked, tasks_to_submit, time_to_submit
from worklogr.services.worklog import WorklogService

__all__ = [
    "MergePrecedence",
    "merge_entity_states",
    "map_archive_to_worklog",
    "create_tasks_for_day",
    "create_tasks_for_range",
    "export_range",
    "time_to_submit",
    "tasks_to_submit",
    "mark_as_tracked",
    "WorklogService",
]
