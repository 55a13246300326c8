"""
Weekly statistics over placed blocks.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from weekplan.interfaces.habit_repository import IHabitRepository
from weekplan.interfaces.profile_repository import IProfileRepository
from weekplan.interfaces.schedule_block_repository import IScheduleBlockRepository
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.models.enums import BlockStatus, BlockType
from weekplan.models.schedule import ScheduleBlock, WeeklyStats
from weekplan.utils.datetime_utils import day_bounds, get_zone, now_utc, start_of_week, to_local

MORNING_END_HOUR = 12
AFTERNOON_END_HOUR = 17


def time_of_day(local_start: datetime) -> str:
    if local_start.hour < MORNING_END_HOUR:
        return "morning"
    if local_start.hour < AFTERNOON_END_HOUR:
        return "afternoon"
    return "evening"


class WeeklyStatsService:
    """Aggregates one week of blocks for the review screen."""

    def __init__(
        self,
        block_repo: IScheduleBlockRepository,
        task_repo: ITaskRepository,
        habit_repo: IHabitRepository,
        profile_repo: IProfileRepository,
        default_timezone: str = "UTC",
    ):
        self.block_repo = block_repo
        self.task_repo = task_repo
        self.habit_repo = habit_repo
        self.profile_repo = profile_repo
        self.default_timezone = default_timezone

    async def get_weekly_stats(self, user_id: str, now: Optional[datetime] = None) -> WeeklyStats:
        """
        Statistics for the week containing ``now`` in the user's timezone.

        Completed focus hours count only completed task blocks; the habit
        completion rate is a whole percentage of the week's habit blocks.
        """
        profile = await self.profile_repo.get(user_id)
        tz = get_zone(profile.timezone if profile else self.default_timezone)
        week_start = start_of_week(now or now_utc(), tz)
        week_end = week_start + timedelta(days=6)
        range_start, _ = day_bounds(week_start, tz)
        _, range_end = day_bounds(week_end, tz)

        blocks = await self.block_repo.list(user_id, range_start, range_end)
        tasks_by_status = await self.task_repo.count_by_status(user_id)
        habits = await self.habit_repo.list(user_id)

        return WeeklyStats(
            week_start=week_start,
            week_end=week_end,
            total_blocks=len(blocks),
            blocks_by_status=dict(Counter(BlockStatus(b.status).value for b in blocks)),
            blocks_by_type=dict(Counter(BlockType(b.block_type).value for b in blocks)),
            completed_focus_hours=self._completed_focus_hours(blocks),
            habit_blocks=sum(1 for b in blocks if b.block_type == BlockType.HABIT),
            habit_completion_rate=self._habit_completion_rate(blocks),
            completed_by_time_of_day=self._completed_by_time_of_day(blocks, tz),
            tasks_by_status=tasks_by_status,
            total_habits=len(habits),
        )

    @staticmethod
    def _completed_focus_hours(blocks: list[ScheduleBlock]) -> float:
        minutes = sum(
            b.duration_minutes
            for b in blocks
            if b.block_type == BlockType.TASK and b.status == BlockStatus.COMPLETED
        )
        return round(minutes / 60, 1)

    @staticmethod
    def _habit_completion_rate(blocks: list[ScheduleBlock]) -> int:
        habit_blocks = [b for b in blocks if b.block_type == BlockType.HABIT]
        if not habit_blocks:
            return 0
        completed = sum(1 for b in habit_blocks if b.status == BlockStatus.COMPLETED)
        return round(completed / len(habit_blocks) * 100)

    @staticmethod
    def _completed_by_time_of_day(blocks: list[ScheduleBlock], tz) -> dict[str, int]:
        counts = {"morning": 0, "afternoon": 0, "evening": 0}
        for block in blocks:
            if block.status == BlockStatus.COMPLETED:
                counts[time_of_day(to_local(block.start_ts, tz))] += 1
        return counts
