"""
Planning run controller.

Loads the user's data, runs the placement engine and persists the result.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional
from uuid import UUID

from weekplan.core.exceptions import ConfigurationError, PartialWriteError
from weekplan.core.logger import setup_logger
from weekplan.interfaces.event_repository import ICalendarEventRepository
from weekplan.interfaces.habit_repository import IHabitRepository
from weekplan.interfaces.profile_repository import IProfileRepository
from weekplan.interfaces.schedule_block_repository import IScheduleBlockRepository
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.models.enums import TaskStatus
from weekplan.models.profile import Profile
from weekplan.models.schedule import PlanningRunResult, ScheduleBlock, ScheduleBlockCreate
from weekplan.models.task import Task
from weekplan.services.placement_engine import PlacementEngine
from weekplan.utils.datetime_utils import day_bounds, get_zone, now_utc, start_of_week

logger = setup_logger(__name__)


class PlanningService:
    """Service that rebuilds a user's weekly schedule."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        habit_repo: IHabitRepository,
        event_repo: ICalendarEventRepository,
        profile_repo: IProfileRepository,
        block_repo: IScheduleBlockRepository,
        engine: Optional[PlacementEngine] = None,
    ):
        self.task_repo = task_repo
        self.habit_repo = habit_repo
        self.event_repo = event_repo
        self.profile_repo = profile_repo
        self.block_repo = block_repo
        self.engine = engine or PlacementEngine.from_settings()

    async def _load_profile(self, user_id: str) -> Profile:
        profile = await self.profile_repo.get(user_id)
        if profile is None:
            raise ConfigurationError("Profile not found; complete onboarding before planning")
        try:
            get_zone(profile.timezone)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        return profile

    async def run_planning(self, user_id: str, now: Optional[datetime] = None) -> PlanningRunResult:
        """
        Replace the user's schedule with a fresh plan for the current week.

        Tasks already ``scheduled`` are planned again as backlog, because the
        previous blocks are all replaced.

        Raises:
            ConfigurationError: Missing profile or unusable working hours
            PartialWriteError: Persisting the plan failed
        """
        now = now or now_utc()
        profile = await self._load_profile(user_id)
        tz = get_zone(profile.timezone)
        week_start = start_of_week(now, tz)
        days = self.engine.horizon(week_start)
        # Fails fast on bad working hours, before anything is read or written.
        self.engine.resolve_windows(profile, days)

        horizon_start, _ = day_bounds(days[0], tz)
        _, horizon_end = day_bounds(days[-1], tz)

        tasks = await self.task_repo.list_plannable(user_id)
        habits = await self.habit_repo.list(user_id)
        events = await self.event_repo.list_overlapping(user_id, horizon_start, horizon_end)

        previously_scheduled = {task.id for task in tasks if task.status == TaskStatus.SCHEDULED}
        planning_tasks: list[Task] = [
            task.model_copy(update={"status": TaskStatus.BACKLOG})
            if task.id in previously_scheduled
            else task
            for task in tasks
        ]

        placement = self.engine.plan(planning_tasks, habits, events, profile, week_start, now)

        scheduled_ids = list(placement.scheduled_task_ids)
        placed = set(scheduled_ids)
        reverted_ids = [
            task.id for task in tasks if task.id in previously_scheduled and task.id not in placed
        ]

        # Cancelling the caller does not interrupt a write already under way.
        written = await asyncio.shield(
            self._write(user_id, placement.blocks, scheduled_ids, reverted_ids)
        )

        logger.info(
            f"Planning run for {user_id}: week of {week_start}, {len(written)} blocks, "
            f"{len(scheduled_ids)} scheduled, {len(placement.unscheduled_task_ids)} unscheduled, "
            f"{len(placement.skipped_task_ids)} skipped"
        )
        return PlanningRunResult(
            blocks_created=len(written),
            week_start=week_start,
            scheduled_task_ids=scheduled_ids,
            unscheduled_task_ids=placement.unscheduled_task_ids,
            skipped_task_ids=placement.skipped_task_ids,
        )

    async def _write(
        self,
        user_id: str,
        blocks: list[ScheduleBlockCreate],
        scheduled_ids: list[UUID],
        reverted_ids: list[UUID],
    ) -> list[ScheduleBlock]:
        try:
            written = await self.block_repo.replace_all(user_id, blocks)
        except Exception as exc:
            logger.error(f"Failed to write {len(blocks)} blocks for {user_id}: {exc}")
            raise PartialWriteError(
                "Failed to write schedule blocks",
                intended=len(blocks),
                written=0,
                stage="blocks",
            ) from exc

        try:
            if scheduled_ids:
                await self.task_repo.set_status_many(user_id, scheduled_ids, TaskStatus.SCHEDULED)
            if reverted_ids:
                await self.task_repo.set_status_many(user_id, reverted_ids, TaskStatus.BACKLOG)
        except Exception as exc:
            logger.error(f"Blocks written but task status update failed for {user_id}: {exc}")
            raise PartialWriteError(
                "Schedule written but task statuses were not updated",
                intended=len(blocks),
                written=len(written),
                stage="task_status",
            ) from exc

        return written
