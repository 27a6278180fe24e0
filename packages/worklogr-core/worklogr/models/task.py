"""
Task model for worklogr.

Tasks carry the raw per-day time tracking the worklog is built from.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from worklogr.utils.duration import as_milliseconds

logger = logging.getLogger(__name__)

# Milliseconds spent, keyed by "YYYY-MM-DD"
TimeSpentOnDay = Dict[str, int]

# Collaborator keys (camelCase, as persisted by the tracker) -> field names
_CAMEL_KEYS = {
    "timeSpentOnDay": "time_spent_on_day",
    "issueTimeTracked": "issue_time_tracked",
    "projectId": "project_id",
    "parentId": "parent_id",
    "issueId": "issue_id",
    "issueType": "issue_type",
    "isDone": "is_done",
    "timeEstimate": "time_estimate",
}


def _load_mapping(value, task_id=None) -> Optional[TimeSpentOnDay]:
    """
    Mappings may arrive as JSON strings from flat storage.

    Unreadable values are dropped with a warning so one corrupt task
    does not fail the whole collection.
    """
    if value is None:
        return None
    try:
        if isinstance(value, str):
            value = json.loads(value)
        return dict(value)
    except (TypeError, ValueError) as e:
        logger.warning(f"Dropping unreadable day mapping on task {task_id}: {e}")
        return None


@dataclass
class Task:
    """
    A tracked task.

    Attributes:
        id: Unique identifier, stable across live/archived state
        title: Task title
        time_spent_on_day: Milliseconds spent per day ("YYYY-MM-DD" keys)
        issue_time_tracked: Milliseconds already reported to an issue tracker, per day
        project_id: Owning project
        parent_id: Parent task for sub tasks
        issue_id: Linked issue in a remote tracker
        issue_type: Kind of remote tracker (e.g. "GITLAB")
        is_done: Whether the task is finished
        time_estimate: Estimated milliseconds
    """

    id: str
    title: str = ""
    time_spent_on_day: TimeSpentOnDay = field(default_factory=dict)
    issue_time_tracked: Optional[TimeSpentOnDay] = None
    project_id: Optional[str] = None
    parent_id: Optional[str] = None
    issue_id: Optional[str] = None
    issue_type: Optional[str] = None
    is_done: bool = False
    time_estimate: int = 0

    def __post_init__(self):
        if not self.id:
            raise ValueError("Task id must not be empty")

    @property
    def time_spent(self) -> int:
        """Total milliseconds across all days."""
        return sum(max(as_milliseconds(v), 0) for v in self.time_spent_on_day.values())

    def copy(self, **changes) -> "Task":
        """Return a copy with independent day mappings."""
        changes.setdefault("time_spent_on_day", dict(self.time_spent_on_day))
        if self.issue_time_tracked is not None:
            changes.setdefault("issue_time_tracked", dict(self.issue_time_tracked))
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary for export/serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "time_spent_on_day": dict(self.time_spent_on_day),
            "issue_time_tracked": dict(self.issue_time_tracked) if self.issue_time_tracked is not None else None,
            "project_id": self.project_id,
            "parent_id": self.parent_id,
            "issue_id": self.issue_id,
            "issue_type": self.issue_type,
            "is_done": self.is_done,
            "time_estimate": self.time_estimate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a collaborator dictionary (snake_case or camelCase keys)."""
        data = {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}

        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            time_spent_on_day=_load_mapping(data.get("time_spent_on_day"), data.get("id")) or {},
            issue_time_tracked=_load_mapping(data.get("issue_time_tracked"), data.get("id")),
            project_id=data.get("project_id"),
            parent_id=data.get("parent_id"),
            issue_id=data.get("issue_id"),
            issue_type=data.get("issue_type"),
            is_done=bool(data.get("is_done", False)),
            time_estimate=data.get("time_estimate") or 0,
        )


@dataclass
class EntityState:
    """
    An ordered collection of tasks.

    Attributes:
        ids: Task ids in display order
        entities: Task lookup by id
    """

    ids: List[str] = field(default_factory=list)
    entities: Dict[str, Task] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "EntityState":
        return cls()

    @classmethod
    def from_tasks(cls, tasks: List[Task]) -> "EntityState":
        """Build a collection from tasks, keeping their order."""
        state = cls()
        for task in tasks:
            if task.id not in state.entities:
                state.ids.append(task.id)
            state.entities[task.id] = task
        return state

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EntityState":
        """Create EntityState from an ``{"ids": [...], "entities": {...}}`` dictionary."""
        if not data:
            return cls.empty()

        entities = {}
        for task_id, raw in (data.get("entities") or {}).items():
            if isinstance(raw, Task):
                entities[task_id] = raw
            elif raw is not None:
                entities[task_id] = Task.from_dict({**raw, "id": raw.get("id") or task_id})

        return cls(ids=list(data.get("ids") or []), entities=entities)

    def to_dict(self) -> dict:
        return {
            "ids": list(self.ids),
            "entities": {task_id: task.to_dict() for task_id, task in self.entities.items()},
        }

    def __len__(self) -> int:
        return len(self.ids)
