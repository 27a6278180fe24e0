"""
Worklog aggregate models.

The aggregate is a sparse year -> month -> day tree. A node only exists
when some task spent time inside it. Nodes are built once by the
archive mapper and are treated as read-only afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from worklogr.models.task import Task

V = TypeVar("V")


@dataclass
class LogEntry:
    """
    Time one task spent on one day.

    Attributes:
        task: The task record
        time_spent: Milliseconds spent that day
        is_active: True when the task is still live (not archived)
    """

    task: Task
    time_spent: int
    is_active: bool = False


@dataclass
class WorklogDay:
    """A day with at least one log entry."""

    date_str: str
    day_str: str = ""
    time_spent: int = 0
    log_entries: List[LogEntry] = field(default_factory=list)

    def add(self, entry: LogEntry) -> None:
        self.log_entries.append(entry)
        self.time_spent += entry.time_spent


@dataclass
class WorklogWeek:
    """A week bucket of a month holding references to its day nodes."""

    week_nr: int
    start: int
    end: int
    time_spent: int = 0
    days_worked: int = 0
    ent: Dict[int, WorklogDay] = field(default_factory=dict)


@dataclass
class WorklogMonth:
    """A month with at least one day node."""

    time_spent: int = 0
    days_worked: int = 0
    ent: Dict[int, WorklogDay] = field(default_factory=dict)
    weeks: List[WorklogWeek] = field(default_factory=list)


@dataclass
class WorklogYear:
    """A year with at least one month node."""

    time_spent: int = 0
    days_worked: int = 0
    month_worked: int = 0
    ent: Dict[int, WorklogMonth] = field(default_factory=dict)


# year -> WorklogYear
Worklog = Dict[int, WorklogYear]


@dataclass(frozen=True)
class WorklogResult:
    """A complete aggregate together with its grand total."""

    worklog: Worklog = field(default_factory=dict)
    total_time_spent: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.worklog


@dataclass(frozen=True)
class WorklogExport:
    """
    Deduplicated task list for a month or week.

    ``total_time_spent`` is summed from the raw log entries of the
    range, not from ``tasks``.
    """

    tasks: Tuple[dict, ...] = ()
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None
    total_time_spent: int = 0

    @property
    def task_ids(self) -> List[str]:
        return [task["id"] for task in self.tasks]


def sorted_items(mapping: Mapping[int, V], reverse: bool = True) -> List[Tuple[int, V]]:
    """Return ``(key, node)`` pairs ordered numerically, newest first by default."""
    return sorted(mapping.items(), key=lambda item: int(item[0]), reverse=reverse)


def iter_days(worklog: Worklog) -> Iterable[Tuple[int, int, int, WorklogDay]]:
    """Yield ``(year, month, day, node)`` in chronological order."""
    for year, year_node in sorted_items(worklog, reverse=False):
        for month, month_node in sorted_items(year_node.ent, reverse=False):
            for day, day_node in sorted_items(month_node.ent, reverse=False):
                yield year, month, day, day_node
