"""
Schedule API endpoints: planning runs, placed blocks and weekly stats.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from weekplan.api.deps import (
    CurrentUser,
    EventRepo,
    HabitRepo,
    ProfileRepo,
    ScheduleBlockRepo,
    TaskRepo,
)
from weekplan.core.config import get_settings
from weekplan.core.exceptions import ConfigurationError, NotFoundError, PartialWriteError
from weekplan.models.schedule import (
    PlanningRunResult,
    ScheduleBlock,
    ScheduleBlockUpdate,
    WeeklyStats,
)
from weekplan.services.planning_service import PlanningService
from weekplan.services.weekly_stats_service import WeeklyStatsService
from weekplan.utils.datetime_utils import day_bounds, get_zone, now_utc, start_of_week

router = APIRouter()


@router.post("/plan", response_model=PlanningRunResult)
async def run_planning(
    user: CurrentUser,
    task_repo: TaskRepo,
    habit_repo: HabitRepo,
    event_repo: EventRepo,
    profile_repo: ProfileRepo,
    block_repo: ScheduleBlockRepo,
) -> PlanningRunResult:
    """Rebuild this week's schedule from tasks, habits and events."""
    service = PlanningService(
        task_repo=task_repo,
        habit_repo=habit_repo,
        event_repo=event_repo,
        profile_repo=profile_repo,
        block_repo=block_repo,
    )
    try:
        return await service.run_planning(user.id)
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except PartialWriteError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": exc.message, **exc.details},
        ) from exc


@router.get("/blocks", response_model=list[ScheduleBlock])
async def list_blocks(
    user: CurrentUser,
    block_repo: ScheduleBlockRepo,
    profile_repo: ProfileRepo,
    start: Optional[datetime] = Query(None, description="Range start (default: start of this week)"),
    end: Optional[datetime] = Query(None, description="Range end (default: end of this week)"),
) -> list[ScheduleBlock]:
    """List placed blocks within a range, ordered by start."""
    if start is None or end is None:
        profile = await profile_repo.get(user.id)
        tz = get_zone(profile.timezone if profile else get_settings().DEFAULT_TIMEZONE)
        week_start = start_of_week(now_utc(), tz)
        if start is None:
            start, _ = day_bounds(week_start, tz)
        if end is None:
            _, end = day_bounds(week_start + timedelta(days=6), tz)
    return await block_repo.list(user.id, start, end)


@router.patch("/blocks/{block_id}", response_model=ScheduleBlock)
async def update_block(
    block_id: UUID,
    update: ScheduleBlockUpdate,
    user: CurrentUser,
    block_repo: ScheduleBlockRepo,
) -> ScheduleBlock:
    """Change a block's status (e.g. mark it completed)."""
    try:
        return await block_repo.update(user.id, block_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/blocks/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_block(
    block_id: UUID,
    user: CurrentUser,
    block_repo: ScheduleBlockRepo,
):
    deleted = await block_repo.delete(user.id, block_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"ScheduleBlock {block_id} not found",
        )


@router.get("/stats", response_model=WeeklyStats)
async def get_weekly_stats(
    user: CurrentUser,
    block_repo: ScheduleBlockRepo,
    task_repo: TaskRepo,
    habit_repo: HabitRepo,
    profile_repo: ProfileRepo,
) -> WeeklyStats:
    """Statistics for the current week."""
    service = WeeklyStatsService(
        block_repo=block_repo,
        task_repo=task_repo,
        habit_repo=habit_repo,
        profile_repo=profile_repo,
        default_timezone=get_settings().DEFAULT_TIMEZONE,
    )
    return await service.get_weekly_stats(user.id)
