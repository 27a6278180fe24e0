"""
Integration tests for worklogr.

These tests verify the full stack works together:
- Raw persisted task state is adapted into EntityState
- The service loads, merges and builds the worklog
- Browsing, export and submission work off the built worklog
"""

import pytest

LIVE_STATE = {
    "ids": ["t1", "t2"],
    "entities": {
        "t1": {
            "id": "t1",
            "title": "Implement export",
            "issueId": "101",
            "timeSpentOnDay": {"2024-03-05": 3600000, "2024-03-29": 1800000},
            "issueTimeTracked": {"2024-03-05": 3600000},
        },
        "t2": {
            "id": "t2",
            "title": "Fix week boundary",
            "timeSpentOnDay": {"2024-03-31": 900000, "broken": 5},
        },
    },
}

ARCHIVE_STATE = {
    "ids": ["t0", "t1"],
    "entities": {
        "t0": {
            "id": "t0",
            "title": "Setup project",
            "isDone": True,
            "timeSpentOnDay": {"2023-12-28": 7200000, "2024-01-02": 600000},
        },
    },
}


@pytest.fixture
def service():
    """WorklogService over an in-memory source holding raw tracker state."""
    from worklogr.config import WorklogrConfig
    from worklogr.models.task import EntityState
    from worklogr.services.worklog import WorklogService
    from worklogr.sources.memory import InMemoryTaskSource

    source = InMemoryTaskSource()
    source.set_tasks("p1", EntityState.from_dict(LIVE_STATE))
    source.set_archive("p1", EntityState.from_dict(ARCHIVE_STATE))
    return WorklogService(source=source, config=WorklogrConfig())


class TestFullStack:
    """End-to-end worklog flow."""

    @pytest.mark.asyncio
    async def test_load_and_browse(self, service):
        """Test the built tree can be browsed newest first."""
        from worklogr.models.worklog import sorted_items

        await service.load("p1")

        years = [year for year, _ in sorted_items(service.worklog)]
        assert years == [2024, 2023]
        assert service.total_time_spent == 3600000 + 1800000 + 900000 + 7200000 + 600000

        months_2024 = [month for month, _ in sorted_items(service.worklog[2024].ent)]
        assert months_2024 == [3, 1]

    @pytest.mark.asyncio
    async def test_dangling_archive_id_ignored(self, service):
        """Test an archived id without a record does not break the build."""
        await service.load("p1")

        assert "t1" in service.merged_state.entities
        assert service.merged_state.ids == ["t0", "t1", "t2"]

    @pytest.mark.asyncio
    async def test_export_last_week(self, service):
        """Test exporting the final week of March."""
        from worklogr.utils.dates import weeks_in_month

        await service.load("p1")
        last_week = weeks_in_month(2024, 3)[-1]

        export = service.export(2024, 3, last_week)

        assert export.task_ids == ["t1", "t2"]
        assert export.total_time_spent == 1800000 + 900000
        assert export.range_end.day == 31

    @pytest.mark.asyncio
    async def test_submission_of_live_issue_tasks(self, service):
        """Test only unreported issue time is submitted."""
        from worklogr.services.submission import mark_as_tracked, tasks_to_submit

        await service.load("p1")

        batch = service.tasks_to_submit()

        assert [item.task.id for item in batch.items] == ["t1"]
        assert batch.total_time_to_submit == 1800000
        assert batch.items[0].duration == "30m"

        updated = mark_as_tracked(batch.items[0].task)
        assert len(tasks_to_submit([updated])) == 0
