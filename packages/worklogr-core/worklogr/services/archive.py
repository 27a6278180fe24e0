"""
Archive mapper for worklogr.

Merges live and archived tasks and folds their per-day time tracking
into the year -> month -> day worklog aggregate.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple

from worklogr.models.task import EntityState
from worklogr.models.worklog import (
    LogEntry,
    Worklog,
    WorklogDay,
    WorklogMonth,
    WorklogResult,
    WorklogWeek,
    WorklogYear,
)
from worklogr.utils.dates import weeks_in_month
from worklogr.utils.duration import as_milliseconds

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


class MergePrecedence(str, Enum):
    """Which collection's record wins when both hold the same task id."""

    ARCHIVED = "archived"
    LIVE = "live"


MERGE_PRECEDENCES = tuple(p.value for p in MergePrecedence)


def merge_entity_states(
    archived: EntityState,
    live: EntityState,
    precedence: MergePrecedence = MergePrecedence.ARCHIVED,
) -> EntityState:
    """
    Merge archived and live tasks into one collection.

    Ids are the union of both collections, archived first, each id only
    once. For ids present on both sides the record comes from the side
    named by ``precedence``.

    Args:
        archived: Closed/historical tasks
        live: Active tasks
        precedence: Which side wins on conflicting ids

    Returns:
        New merged EntityState
    """
    precedence = MergePrecedence(precedence)

    ids = []
    seen = set()
    for task_id in list(archived.ids) + list(live.ids):
        if task_id not in seen:
            seen.add(task_id)
            ids.append(task_id)

    if precedence is MergePrecedence.ARCHIVED:
        entities = {**live.entities, **archived.entities}
    else:
        entities = {**archived.entities, **live.entities}

    conflicts = set(archived.entities) & set(live.entities)
    if conflicts:
        logger.warning(
            f"{len(conflicts)} task(s) present in both live and archived state, "
            f"using {precedence.value} records"
        )

    return EntityState(ids=ids, entities=entities)


def _parse_date(date_str) -> Optional[datetime]:
    if not isinstance(date_str, str):
        return None
    try:
        return datetime.strptime(date_str, DATE_FORMAT)
    except ValueError:
        return None


def _add_weeks(year: int, month: int, month_node: WorklogMonth, first_day_of_week: Optional[int]) -> None:
    for week_nr, week in enumerate(weeks_in_month(year, month, first_day_of_week), start=1):
        days = {day: node for day, node in month_node.ent.items() if day in week}
        if not days:
            continue
        month_node.weeks.append(WorklogWeek(
            week_nr=week_nr,
            start=week.start,
            end=week.end,
            time_spent=sum(node.time_spent for node in days.values()),
            days_worked=len(days),
            ent=dict(sorted(days.items())),
        ))


def map_archive_to_worklog(
    state: EntityState,
    live_ids: Iterable[str] = (),
    first_day_of_week: Optional[int] = None,
) -> WorklogResult:
    """
    Build the worklog aggregate from a merged task collection.

    Every positive (day, milliseconds) pair of every task becomes a log
    entry on its day node. Malformed date keys and unusable values are
    skipped, as are ids without a task record.

    Args:
        state: Merged task collection (see merge_entity_states)
        live_ids: Ids of tasks that are still active
        first_day_of_week: Optional weekday (0=Monday) to align week buckets to

    Returns:
        WorklogResult with the aggregate and the grand total in milliseconds
    """
    live_ids = set(live_ids)
    worklog: Worklog = {}
    total_time_spent = 0
    skipped = 0

    for task_id in state.ids:
        task = state.entities.get(task_id)
        if task is None:
            continue

        for date_str, value in task.time_spent_on_day.items():
            time_spent = as_milliseconds(value)
            if time_spent <= 0:
                continue

            date = _parse_date(date_str)
            if date is None:
                skipped += 1
                logger.debug(f"Skipping malformed day key {date_str!r} on task {task_id}")
                continue

            year_node = worklog.setdefault(date.year, WorklogYear())
            month_node = year_node.ent.setdefault(date.month, WorklogMonth())
            day_node = month_node.ent.get(date.day)
            if day_node is None:
                day_node = WorklogDay(date_str=date.strftime(DATE_FORMAT), day_str=date.strftime("%a"))
                month_node.ent[date.day] = day_node
                month_node.days_worked += 1
                year_node.days_worked += 1

            day_node.add(LogEntry(task=task, time_spent=time_spent, is_active=task_id in live_ids))
            month_node.time_spent += time_spent
            year_node.time_spent += time_spent
            total_time_spent += time_spent

    for year, year_node in worklog.items():
        year_node.month_worked = len(year_node.ent)
        for month, month_node in year_node.ent.items():
            _add_weeks(year, month, month_node, first_day_of_week)

    if skipped:
        logger.warning(f"Skipped {skipped} malformed day entries while building worklog")

    return WorklogResult(worklog=worklog, total_time_spent=total_time_spent)


def build_worklog(
    live: EntityState,
    archived: EntityState,
    precedence: MergePrecedence = MergePrecedence.ARCHIVED,
    first_day_of_week: Optional[int] = None,
) -> Tuple[EntityState, WorklogResult]:
    """Merge both collections and map them; returns the merged state and the result."""
    merged = merge_entity_states(archived, live, precedence)
    return merged, map_archive_to_worklog(merged, live.ids, first_day_of_week)
