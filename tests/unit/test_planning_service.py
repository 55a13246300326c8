"""
Unit tests for PlanningService.
"""

import asyncio
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from weekplan.core.exceptions import ConfigurationError, PartialWriteError
from weekplan.models.enums import BlockType, TaskStatus
from weekplan.models.profile import DayHours, Profile, WorkingHours
from weekplan.models.task import Task
from weekplan.services.placement_engine import PlacementEngine
from weekplan.services.planning_service import PlanningService

# Wednesday; the planned week starts on Monday 2026-10-19.
NOW = datetime(2026, 10, 21, 8, 0, tzinfo=timezone.utc)
WEEK_START = date(2026, 10, 19)


def _build_task(
    *,
    task_id: UUID | None = None,
    status: TaskStatus = TaskStatus.BACKLOG,
    est_min: int = 60,
) -> Task:
    return Task(
        id=task_id or uuid4(),
        user_id="test_user",
        title="Write report",
        status=status,
        est_min=est_min,
        created_at=NOW,
        updated_at=NOW,
    )


def _build_profile(**overrides) -> Profile:
    values = {
        "user_id": "test_user",
        "timezone": "UTC",
        "working_hours": WorkingHours(monday=DayHours(start="09:00", end="12:00")),
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Profile(**values)


def _build_service(
    *,
    tasks: list[Task] | None = None,
    profile: Profile | None = None,
) -> tuple[PlanningService, dict[str, AsyncMock]]:
    repos = {
        "task_repo": AsyncMock(),
        "habit_repo": AsyncMock(),
        "event_repo": AsyncMock(),
        "profile_repo": AsyncMock(),
        "block_repo": AsyncMock(),
    }
    repos["task_repo"].list_plannable.return_value = tasks or []
    repos["task_repo"].set_status_many.return_value = 0
    repos["habit_repo"].list.return_value = []
    repos["event_repo"].list_overlapping.return_value = []
    repos["profile_repo"].get.return_value = profile
    repos["block_repo"].replace_all.side_effect = lambda user_id, blocks: list(blocks)
    service = PlanningService(**repos, engine=PlacementEngine())
    return service, repos


@pytest.mark.asyncio
async def test_run_planning_writes_blocks_and_marks_tasks_scheduled() -> None:
    task = _build_task()
    service, repos = _build_service(tasks=[task], profile=_build_profile())

    result = await service.run_planning("test_user", now=NOW)

    assert result.blocks_created == 1
    assert result.week_start == WEEK_START
    assert result.scheduled_task_ids == [task.id]

    user_id, blocks = repos["block_repo"].replace_all.await_args.args
    assert user_id == "test_user"
    assert [b.block_type for b in blocks] == [BlockType.TASK]
    assert blocks[0].start_ts == datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
    repos["task_repo"].set_status_many.assert_awaited_once_with(
        "test_user", [task.id], TaskStatus.SCHEDULED
    )


@pytest.mark.asyncio
async def test_events_loaded_for_horizon_only() -> None:
    service, repos = _build_service(profile=_build_profile())

    await service.run_planning("test_user", now=NOW)

    user_id, start, end = repos["event_repo"].list_overlapping.await_args.args
    assert start == datetime(2026, 10, 19, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 26, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_previously_scheduled_tasks_are_replanned() -> None:
    task = _build_task(status=TaskStatus.SCHEDULED)
    service, repos = _build_service(tasks=[task], profile=_build_profile())

    result = await service.run_planning("test_user", now=NOW)

    assert result.scheduled_task_ids == [task.id]
    assert result.blocks_created == 1


@pytest.mark.asyncio
async def test_scheduled_task_without_room_reverts_to_backlog() -> None:
    fits = _build_task(est_min=180)
    squeezed_out = _build_task(status=TaskStatus.SCHEDULED, est_min=60)
    service, repos = _build_service(tasks=[fits, squeezed_out], profile=_build_profile())

    result = await service.run_planning("test_user", now=NOW)

    assert result.unscheduled_task_ids == [squeezed_out.id]
    calls = [call.args for call in repos["task_repo"].set_status_many.await_args_list]
    assert calls == [
        ("test_user", [fits.id], TaskStatus.SCHEDULED),
        ("test_user", [squeezed_out.id], TaskStatus.BACKLOG),
    ]


@pytest.mark.asyncio
async def test_repeated_runs_produce_same_blocks() -> None:
    task = _build_task(est_min=150)
    service, repos = _build_service(tasks=[task], profile=_build_profile())

    await service.run_planning("test_user", now=NOW)
    first_blocks = repos["block_repo"].replace_all.await_args.args[1]

    rescheduled = task.model_copy(update={"status": TaskStatus.SCHEDULED})
    repos["task_repo"].list_plannable.return_value = [rescheduled]
    await service.run_planning("test_user", now=NOW)
    second_blocks = repos["block_repo"].replace_all.await_args.args[1]

    assert first_blocks == second_blocks


@pytest.mark.asyncio
async def test_missing_profile_raises_before_any_write() -> None:
    service, repos = _build_service(tasks=[_build_task()], profile=None)

    with pytest.raises(ConfigurationError):
        await service.run_planning("test_user", now=NOW)

    repos["block_repo"].replace_all.assert_not_awaited()
    repos["task_repo"].set_status_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_no_working_hours_raises_before_any_write() -> None:
    service, repos = _build_service(
        tasks=[_build_task()],
        profile=_build_profile(working_hours=WorkingHours()),
    )

    with pytest.raises(ConfigurationError):
        await service.run_planning("test_user", now=NOW)

    repos["task_repo"].list_plannable.assert_not_awaited()
    repos["block_repo"].replace_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_malformed_working_day_raises_before_any_write() -> None:
    hours = WorkingHours(
        monday=DayHours(start="09:00", end="12:00"),
        tuesday=DayHours(start="12:00", end="09:00"),
    )
    service, repos = _build_service(tasks=[_build_task()], profile=_build_profile(working_hours=hours))

    with pytest.raises(ConfigurationError):
        await service.run_planning("test_user", now=NOW)

    repos["block_repo"].replace_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_block_write_failure_raises_partial_write_error() -> None:
    service, repos = _build_service(tasks=[_build_task()], profile=_build_profile())
    repos["block_repo"].replace_all.side_effect = RuntimeError("disk full")

    with pytest.raises(PartialWriteError) as exc_info:
        await service.run_planning("test_user", now=NOW)

    assert exc_info.value.stage == "blocks"
    assert exc_info.value.intended == 1
    assert exc_info.value.written == 0
    repos["task_repo"].set_status_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_status_update_failure_reports_written_blocks() -> None:
    service, repos = _build_service(tasks=[_build_task()], profile=_build_profile())
    repos["task_repo"].set_status_many.side_effect = RuntimeError("locked")

    with pytest.raises(PartialWriteError) as exc_info:
        await service.run_planning("test_user", now=NOW)

    assert exc_info.value.stage == "task_status"
    assert exc_info.value.details == {"intended": 1, "written": 1, "stage": "task_status"}


@pytest.mark.asyncio
async def test_cancellation_does_not_interrupt_write() -> None:
    service, repos = _build_service(tasks=[_build_task()], profile=_build_profile())
    started = asyncio.Event()
    release = asyncio.Event()
    finished = []

    async def slow_replace(user_id, blocks):
        started.set()
        await release.wait()
        finished.append(len(blocks))
        return list(blocks)

    repos["block_repo"].replace_all.side_effect = slow_replace

    run = asyncio.create_task(service.run_planning("test_user", now=NOW))
    await started.wait()
    run.cancel()
    release.set()

    with pytest.raises(asyncio.CancelledError):
        await run
    # Let the shielded write finish.
    for _ in range(5):
        await asyncio.sleep(0)

    assert finished == [1]
    repos["task_repo"].set_status_many.assert_awaited_once()
