"""
Abstract task source interface.

A task source hands the live and archived task collections of a
project to the worklog service. How it stores them is up to it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from worklogr.models.task import EntityState


class TaskSource(ABC):
    """
    Abstract base class for task sources.

    Implementations return ``None`` when a project has no stored
    collection; the service treats that as empty.
    """

    @abstractmethod
    async def load_tasks(self, project_id: str) -> Optional[EntityState]:
        """
        Load the live (active) tasks of a project.

        Args:
            project_id: Project identifier

        Returns:
            EntityState or None if nothing is stored
        """
        pass

    @abstractmethod
    async def load_archive(self, project_id: str) -> Optional[EntityState]:
        """
        Load the archived tasks of a project.

        Args:
            project_id: Project identifier

        Returns:
            EntityState or None if nothing is stored
        """
        pass
