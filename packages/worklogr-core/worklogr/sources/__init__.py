"""
Task sources feeding the worklog service.
"""

from worklogr.sources.interface import TaskSource
from worklogr.sources.memory import InMemoryTaskSource

__all__ = [
    "TaskSource",
    "InMemoryTaskSource",
]
