"""
Unsubmitted time for issue-tracker worklogs.

Works out how much tracked time has not yet been reported to a remote
issue tracker. Sending it is left to the tracker client.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from worklogr.models.task import Task
from worklogr.utils.duration import as_milliseconds, ms_to_string

logger = logging.getLogger(__name__)

# Remote trackers only book whole minutes
DEFAULT_MIN_TIME_TO_SUBMIT_MS = 60000


@dataclass
class SubmissionItem:
    """
    A task with time still to report.

    Attributes:
        task: The task record
        time_to_submit: Unreported milliseconds
    """

    task: Task
    time_to_submit: int

    @property
    def duration(self) -> str:
        """Duration string for the tracker, e.g. "1h30m"."""
        return ms_to_string(self.time_to_submit).replace(" ", "")


@dataclass
class SubmissionBatch:
    """Tasks to report together with their combined unreported time."""

    items: List[SubmissionItem] = field(default_factory=list)

    @property
    def total_time_to_submit(self) -> int:
        return sum(item.time_to_submit for item in self.items)

    def __len__(self) -> int:
        return len(self.items)


def time_to_submit(task: Task) -> int:
    """
    Milliseconds spent on a task that the issue tracker does not know about.

    Days without a tracked value count in full. Days with one count only
    the positive difference. Unusable values count as 0.
    """
    tracked = task.issue_time_tracked or {}
    total = 0
    for date_str, value in task.time_spent_on_day.items():
        spent = max(as_milliseconds(value), 0)
        already = as_milliseconds(tracked.get(date_str))
        if already:
            diff = spent - already
            if diff > 0:
                total += diff
        else:
            total += spent
    return total


def tasks_to_submit(
    tasks: Iterable[Task],
    min_time_ms: int = DEFAULT_MIN_TIME_TO_SUBMIT_MS,
) -> SubmissionBatch:
    """
    Collect tasks whose unreported time reaches ``min_time_ms``.

    Args:
        tasks: Candidate tasks, usually those linked to an issue
        min_time_ms: Smallest amount worth reporting. WorklogService.tasks_to_submit
            passes the configured submission.min_time_to_submit_ms.

    Returns:
        SubmissionBatch in input order
    """
    batch = SubmissionBatch()
    for task in tasks:
        pending = time_to_submit(task)
        if pending >= min_time_ms:
            batch.items.append(SubmissionItem(task=task, time_to_submit=pending))

    logger.debug(f"{len(batch)} task(s) with {ms_to_string(batch.total_time_to_submit)} to submit")
    return batch


def mark_as_tracked(task: Task) -> Task:
    """
    Return a copy of ``task`` with every day marked as reported.

    The whole day mapping is copied, regardless of how much time was
    actually submitted.
    """
    return task.copy(issue_time_tracked=dict(task.time_spent_on_day))
