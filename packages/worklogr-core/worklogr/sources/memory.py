"""
In-memory task source.

Keeps collections in dictionaries, for embedding in a host that already
holds its state in memory, and for tests.
"""

from typing import Dict, Optional

from worklogr.models.task import EntityState
from worklogr.sources.interface import TaskSource


class InMemoryTaskSource(TaskSource):
    """Task source backed by per-project dictionaries."""

    def __init__(
        self,
        tasks: Optional[Dict[str, EntityState]] = None,
        archives: Optional[Dict[str, EntityState]] = None,
    ):
        self._tasks = dict(tasks or {})
        self._archives = dict(archives or {})

    def set_tasks(self, project_id: str, state: EntityState) -> None:
        self._tasks[project_id] = state

    def set_archive(self, project_id: str, state: EntityState) -> None:
        self._archives[project_id] = state

    async def load_tasks(self, project_id: str) -> Optional[EntityState]:
        return self._tasks.get(project_id)

    async def load_archive(self, project_id: str) -> Optional[EntityState]:
        return self._archives.get(project_id)
