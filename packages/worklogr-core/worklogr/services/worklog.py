"""
Worklog Service for worklogr.

Loads a project's tasks from a task source, builds the worklog aggregate
and publishes it for readers.
"""

import logging
from typing import Optional

from worklogr.config import WorklogrConfig, get_config
from worklogr.models.task import EntityState
from worklogr.models.worklog import Worklog, WorklogExport, WorklogResult
from worklogr.services.archive import MergePrecedence, build_worklog
from worklogr.services.export import export_range
from worklogr.services.submission import SubmissionBatch, tasks_to_submit
from worklogr.sources.interface import TaskSource
from worklogr.utils.dates import WeekInMonth

logger = logging.getLogger(__name__)


class WorklogService:
    """
    Service holding the current worklog of a project.

    Every rebuild creates a new WorklogResult and replaces the published
    one in a single assignment. Readers always get a complete aggregate,
    either the previous or the new one.
    """

    def __init__(self, source: Optional[TaskSource] = None, config: Optional[WorklogrConfig] = None):
        """
        Initialize worklog service.

        Args:
            source: TaskSource used by load(). Not needed for rebuild().
            config: Optional WorklogrConfig. If not provided, uses global config.
        """
        self._source = source
        self._config = config
        self._result = WorklogResult()
        self._merged = EntityState.empty()
        self._closed = False

    @property
    def config(self) -> WorklogrConfig:
        """Get the configuration."""
        if self._config is None:
            self._config = get_config()
        return self._config

    @property
    def result(self) -> WorklogResult:
        """The currently published aggregate and total."""
        return self._result

    @property
    def worklog(self) -> Worklog:
        return self._result.worklog

    @property
    def total_time_spent(self) -> int:
        return self._result.total_time_spent

    @property
    def merged_state(self) -> EntityState:
        """The merged task collection the current aggregate was built from."""
        return self._merged

    @property
    def is_closed(self) -> bool:
        return self._closed

    def rebuild(self, live: EntityState, archived: EntityState) -> WorklogResult:
        """
        Build a fresh aggregate from both collections and publish it.

        Args:
            live: Active tasks
            archived: Archived tasks

        Returns:
            The newly published WorklogResult
        """
        merged, result = build_worklog(
            live,
            archived,
            precedence=MergePrecedence(self.config.merge_precedence),
            first_day_of_week=self.config.first_day_of_week,
        )
        self._merged, self._result = merged, result

        logger.info(
            f"Built worklog: {len(merged)} tasks, {len(result.worklog)} years, "
            f"{result.total_time_spent} ms total"
        )
        return result

    async def load(self, project_id: str) -> Optional[WorklogResult]:
        """
        Load a project's tasks from the source and rebuild.

        Args:
            project_id: Project identifier

        Returns:
            The new WorklogResult, or None if the service was closed
            while loading (the published aggregate is left untouched)
        """
        if self._source is None:
            raise RuntimeError("No task source configured for WorklogService")

        archived = await self._source.load_archive(project_id) or EntityState.empty()
        live = await self._source.load_tasks(project_id) or EntityState.empty()

        if self._closed:
            logger.debug(f"Service closed while loading project {project_id}, discarding")
            return None

        return self.rebuild(live, archived)

    def export(self, year: int, month: int, week: Optional[WeekInMonth] = None) -> WorklogExport:
        """Export a month or week of the current aggregate."""
        return export_range(self._result.worklog, year, month, week)

    def tasks_to_submit(self) -> SubmissionBatch:
        """
        Issue-linked tasks of the current worklog with unreported time.

        Uses the configured submission.min_time_to_submit_ms as the minimum.
        """
        state = self._merged
        tasks = [
            state.entities[task_id] for task_id in state.ids
            if task_id in state.entities and state.entities[task_id].issue_id
        ]
        return tasks_to_submit(tasks, self.config.submission.min_time_to_submit_ms)

    def close(self) -> None:
        """Stop publishing results of loads still in flight."""
        self._closed = True
