"""
Worklog queries and range export.

Derives flat, deduplicated task lists from a built worklog aggregate.
Nothing here mutates the aggregate.
"""

import logging
from datetime import datetime
from typing import List, Optional

from worklogr.models.worklog import Worklog, WorklogDay, WorklogExport, iter_days
from worklogr.utils.dates import WeekInMonth, month_range, week_range
from worklogr.utils.dedupe import dedupe_by_key

logger = logging.getLogger(__name__)


def _project_entries(day: WorklogDay) -> List[dict]:
    """One task dict per log entry, with that day's time and date attached."""
    tasks = []
    for entry in day.log_entries:
        task = entry.task.to_dict()
        task["time_spent"] = entry.time_spent
        task["date_str"] = day.date_str
        tasks.append(task)
    return tasks


def create_tasks_for_day(day: WorklogDay) -> List[dict]:
    """
    Deduplicated tasks worked on during one day.

    Each task dict carries ``time_spent`` and ``date_str`` of its first
    log entry for the day.
    """
    return dedupe_by_key(_project_entries(day), "id")


def _days_in_range(worklog: Worklog, range_start: datetime, range_end: datetime) -> List[WorklogDay]:
    return [
        node for year, month, day, node in iter_days(worklog)
        if range_start <= datetime(year, month, day) <= range_end
    ]


def create_tasks_for_range(
    worklog: Worklog,
    year: int,
    month: int,
    week: Optional[WeekInMonth] = None,
) -> List[dict]:
    """
    Deduplicated tasks worked on during a month or a week of it.

    A task worked on over several days appears once, carrying the
    ``time_spent`` and ``date_str`` of the earliest day. Use
    export_range when the range total is needed.
    """
    return list(export_range(worklog, year, month, week).tasks)


def export_range(
    worklog: Worklog,
    year: int,
    month: int,
    week: Optional[WeekInMonth] = None,
) -> WorklogExport:
    """
    Export a month, or one week of it, from the aggregate.

    Args:
        worklog: Built worklog aggregate
        year: Calendar year
        month: Month 1-12
        week: Optional week bucket; the whole month when omitted

    Returns:
        WorklogExport with the deduplicated task list, the inclusive
        range boundaries and the range total. Invalid months or weeks
        give an empty export without boundaries.
    """
    try:
        if week is None:
            range_start, range_end = month_range(year, month)
        else:
            range_start, range_end = week_range(year, month, week)
    except ValueError as e:
        logger.warning(f"Cannot export {year}-{month}: {e}")
        return WorklogExport()

    tasks = []
    total_time_spent = 0
    for day in _days_in_range(worklog, range_start, range_end):
        tasks.extend(_project_entries(day))
        total_time_spent += sum(entry.time_spent for entry in day.log_entries)

    return WorklogExport(
        tasks=tuple(dedupe_by_key(tasks, "id")),
        range_start=range_start,
        range_end=range_end,
        total_time_spent=total_time_spent,
    )
