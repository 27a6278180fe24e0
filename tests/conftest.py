"""
Pytest configuration and fixtures for worklogr tests.
"""

import pytest
import sys
from pathlib import Path

# Configure pytest-asyncio
pytest_plugins = ["pytest_asyncio"]

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "worklogr-core"))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / ".worklogr"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def march_tasks():
    """Two live tasks worked on in early March 2024."""
    from worklogr.models.task import Task

    return [
        Task(id="a", title="Write report", time_spent_on_day={"2024-03-05": 3600000}),
        Task(
            id="b",
            title="Review PR",
            time_spent_on_day={"2024-03-05": 1800000, "2024-03-06": 600000},
        ),
    ]


@pytest.fixture
def march_state(march_tasks):
    """Live EntityState holding the March tasks."""
    from worklogr.models.task import EntityState

    return EntityState.from_tasks(march_tasks)


@pytest.fixture
def march_worklog(march_state):
    """WorklogResult built from the March tasks with an empty archive."""
    from worklogr.models.task import EntityState
    from worklogr.services.archive import build_worklog

    _, result = build_worklog(march_state, EntityState.empty())
    return result
