"""
Unit tests for WeeklyStatsService.
"""

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from weekplan.models.enums import BlockStatus, BlockType, TaskStatus
from weekplan.models.schedule import ScheduleBlock
from weekplan.models.task import Task
from weekplan.services.weekly_stats_service import WeeklyStatsService, time_of_day

NOW = datetime(2026, 10, 22, 18, 0, tzinfo=timezone.utc)


def _block(
    start: datetime,
    minutes: int,
    block_type: BlockType = BlockType.TASK,
    status: BlockStatus = BlockStatus.SCHEDULED,
) -> ScheduleBlock:
    return ScheduleBlock(
        id=uuid4(),
        user_id="test_user",
        block_type=block_type,
        ref_id=uuid4(),
        title="Block",
        start_ts=start,
        end_ts=start + timedelta(minutes=minutes),
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )


def _task(status: TaskStatus) -> Task:
    return Task(id=uuid4(), user_id="test_user", title="t", status=status, created_at=NOW, updated_at=NOW)


def _build_service(blocks, tasks=(), habits=(), profile=None) -> tuple[WeeklyStatsService, AsyncMock]:
    block_repo = AsyncMock()
    block_repo.list.return_value = list(blocks)
    task_repo = AsyncMock()
    task_repo.count_by_status.return_value = dict(Counter(task.status.value for task in tasks))
    habit_repo = AsyncMock()
    habit_repo.list.return_value = list(habits)
    profile_repo = AsyncMock()
    profile_repo.get.return_value = profile
    service = WeeklyStatsService(
        block_repo=block_repo,
        task_repo=task_repo,
        habit_repo=habit_repo,
        profile_repo=profile_repo,
    )
    return service, block_repo


def _at(day: int, hour: int) -> datetime:
    return datetime(2026, 10, 19 + day, hour, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_weekly_stats_aggregates_blocks() -> None:
    blocks = [
        _block(_at(0, 9), 90, status=BlockStatus.COMPLETED),
        _block(_at(0, 14), 48, status=BlockStatus.COMPLETED),
        _block(_at(1, 9), 60),
        _block(_at(0, 7), 30, BlockType.HABIT, BlockStatus.COMPLETED),
        _block(_at(1, 7), 30, BlockType.HABIT),
        _block(_at(2, 19), 30, BlockType.HABIT, BlockStatus.COMPLETED),
    ]
    tasks = [_task(TaskStatus.DONE), _task(TaskStatus.SCHEDULED), _task(TaskStatus.SCHEDULED)]
    service, block_repo = _build_service(blocks, tasks, habits=[object(), object()])

    stats = await service.get_weekly_stats("test_user", now=NOW)

    assert stats.week_start == date(2026, 10, 19)
    assert stats.week_end == date(2026, 10, 25)
    assert stats.total_blocks == 6
    assert stats.blocks_by_status == {"completed": 4, "scheduled": 2}
    assert stats.blocks_by_type == {"task": 3, "habit": 3}
    assert stats.completed_focus_hours == 2.3
    assert stats.habit_blocks == 3
    assert stats.habit_completion_rate == 67
    assert stats.completed_by_time_of_day == {"morning": 2, "afternoon": 1, "evening": 1}
    assert stats.tasks_by_status == {"done": 1, "scheduled": 2}
    assert stats.total_habits == 2

    _, start, end = block_repo.list.await_args.args
    assert start == datetime(2026, 10, 19, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 26, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_weekly_stats_empty_week() -> None:
    service, _ = _build_service([])

    stats = await service.get_weekly_stats("test_user", now=NOW)

    assert stats.total_blocks == 0
    assert stats.habit_completion_rate == 0
    assert stats.completed_focus_hours == 0.0


def test_time_of_day_bands() -> None:
    assert time_of_day(_at(0, 11)) == "morning"
    assert time_of_day(_at(0, 12)) == "afternoon"
    assert time_of_day(_at(0, 16)) == "afternoon"
    assert time_of_day(_at(0, 17)) == "evening"
