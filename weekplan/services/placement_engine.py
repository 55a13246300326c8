"""
Placement engine for weekly auto-planning.

Greedy, per task and per day: habits are fixed first, then tasks are taken
in priority order and split into chunks that fit the remaining free time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional
from uuid import UUID
from zoneinfo import ZoneInfo

from weekplan.core.config import Settings, get_settings
from weekplan.core.exceptions import ConfigurationError
from weekplan.core.logger import setup_logger
from weekplan.models.enums import BlockStatus, BlockType, TaskStatus, TimeWindow
from weekplan.models.event import CalendarEvent
from weekplan.models.habit import Habit
from weekplan.models.profile import Profile
from weekplan.models.schedule import ScheduleBlockCreate
from weekplan.models.task import Task
from weekplan.services.recurrence import occurs_on, parse_recurrence, warn_unsupported
from weekplan.services.scoring import WINDOW_ANY_SCORE, sort_by_priority, window_score
from weekplan.services.time_slots import TimeSlot, compute_free_slots, resolve_working_window
from weekplan.utils.datetime_utils import (
    at_clock_time,
    day_bounds,
    ensure_utc,
    get_zone,
    to_local,
)

logger = setup_logger(__name__)

MAX_HORIZON_DAYS = 7
EXPLANATION_SEPARATOR = " • "
PROTECTED_HABIT_EXPLANATION = "Protected recurring habit - scheduled at fixed time"
HABIT_EXPLANATION = "Recurring habit block"


@dataclass
class PlacementResult:
    """Blocks produced by one engine pass and the per-task outcome."""

    blocks: list[ScheduleBlockCreate] = field(default_factory=list)
    scheduled_task_ids: list[UUID] = field(default_factory=list)
    unscheduled_task_ids: list[UUID] = field(default_factory=list)
    skipped_task_ids: list[UUID] = field(default_factory=list)

    def blocks_for(self, ref_id: UUID) -> list[ScheduleBlockCreate]:
        return [block for block in self.blocks if block.ref_id == ref_id]


def allocate(
    free_slots: list[TimeSlot],
    task: Task,
    remaining: int,
    focus_length_min: int,
    buffer_min: int,
) -> tuple[list[TimeSlot], list[TimeSlot], int]:
    """
    Carve task chunks out of free slots, in the order given.

    Each chunk is ``min(remaining, slot length, focus length)``; a slot that
    cannot hold the task's ``min_chunk_min`` is left untouched. After a chunk
    the slot resumes ``buffer_min`` later, so several chunks may share one slot.
    Chunks are computed and returned in UTC.

    Returns:
        (chunks, slots left over, minutes still unplaced)
    """
    buffer = timedelta(minutes=buffer_min)
    chunks: list[TimeSlot] = []
    leftover: list[TimeSlot] = []

    for slot in free_slots:
        current: Optional[TimeSlot] = slot.in_utc()
        while current is not None and remaining > 0:
            chunk_minutes = min(remaining, current.minutes, focus_length_min)
            if chunk_minutes <= 0 or chunk_minutes < task.min_chunk_min:
                break
            chunk_end = current.start + timedelta(minutes=chunk_minutes)
            chunks.append(TimeSlot(current.start, chunk_end))
            remaining -= chunk_minutes
            next_start = chunk_end + buffer
            current = TimeSlot(next_start, current.end) if next_start < current.end else None
        if current is not None:
            leftover.append(current)

    return chunks, leftover, remaining


def build_task_explanation(task: Task, slot_start: datetime, tz: ZoneInfo) -> str:
    """Human-readable reason for a task chunk."""
    parts = [f"Priority: {task.priority.value.upper()}"]
    if task.hard_deadline:
        parts.append("Hard deadline task")
    if task.due_ts is not None:
        due_local = to_local(task.due_ts, tz)
        parts.append(f"Due: {due_local:%b} {due_local.day}")
    if window_score(task.preferred_window, to_local(slot_start, tz)) > WINDOW_ANY_SCORE:
        parts.append(f"Matched preferred {TimeWindow(task.preferred_window).value} window")
    return EXPLANATION_SEPARATOR.join(parts)


class PlacementEngine:
    """
    Computes a week of habit and task blocks.

    Provides:
    - Habit materialisation at fixed times
    - Priority-ordered, chunked task placement within working hours
    - Buffer spacing after every busy interval
    """

    def __init__(
        self,
        horizon_days: int = MAX_HORIZON_DAYS,
        respect_busy_flag: bool = False,
        unsupported_recurrence_policy: str = "daily",
        prefer_window_slots: bool = False,
    ):
        """
        Initialize placement engine.

        Args:
            horizon_days: Days planned from the week start (at most 7)
            respect_busy_flag: Ignore events marked as free when True
            unsupported_recurrence_policy: "daily" or "skip"
            prefer_window_slots: Try slots in the task's preferred window first
        """
        if not 1 <= horizon_days <= MAX_HORIZON_DAYS:
            raise ValueError(f"horizon_days must be between 1 and {MAX_HORIZON_DAYS}")
        if unsupported_recurrence_policy not in ("daily", "skip"):
            raise ValueError("unsupported_recurrence_policy must be 'daily' or 'skip'")
        self.horizon_days = horizon_days
        self.respect_busy_flag = respect_busy_flag
        self.unsupported_recurrence_policy = unsupported_recurrence_policy
        self.prefer_window_slots = prefer_window_slots

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PlacementEngine":
        settings = settings or get_settings()
        return cls(
            horizon_days=settings.PLANNING_HORIZON_DAYS,
            respect_busy_flag=settings.RESPECT_EVENT_BUSY_FLAG,
            unsupported_recurrence_policy=settings.UNSUPPORTED_RECURRENCE_POLICY,
            prefer_window_slots=settings.PREFER_WINDOW_SLOTS,
        )

    def horizon(self, week_start: date) -> list[date]:
        return [week_start + timedelta(days=offset) for offset in range(self.horizon_days)]

    def resolve_windows(self, profile: Profile, days: list[date]) -> dict[date, Optional[TimeSlot]]:
        """
        Working window per horizon day.

        Raises:
            ConfigurationError: No working day at all, or a malformed day
        """
        if not profile.working_hours.has_working_day():
            raise ConfigurationError("No working hours configured")
        tz = get_zone(profile.timezone)
        return {day: resolve_working_window(day, profile.working_hours, tz) for day in days}

    def plan(
        self,
        tasks: list[Task],
        habits: list[Habit],
        events: list[CalendarEvent],
        profile: Profile,
        week_start: date,
        now: datetime,
    ) -> PlacementResult:
        """
        Place habits and backlog tasks over the horizon.

        Args:
            tasks: Tasks in listing order; only backlog tasks are placed
            habits: Habits to materialise every matching day
            events: External events, treated as immovable busy time
            profile: Working hours, timezone, focus length and buffer
            week_start: First day of the horizon
            now: Reference time for due-date urgency

        Returns:
            PlacementResult with blocks in placement order
        """
        tz = get_zone(profile.timezone)
        days = self.horizon(week_start)
        windows = self.resolve_windows(profile, days)
        result = PlacementResult()

        habit_blocks = self._materialise_habits(habits, days, tz)
        result.blocks.extend(habit_blocks)
        placed_by_day = self._slots_by_day(
            [TimeSlot(block.start_ts, block.end_ts) for block in habit_blocks], days, tz
        )
        events_by_day = self._slots_by_day(self._busy_event_slots(events), days, tz)

        backlog: list[Task] = []
        for task in tasks:
            if task.status != TaskStatus.BACKLOG:
                continue
            if not task.is_plannable:
                logger.warning(
                    f"Skipping task {task.id}: est_min={task.est_min}, "
                    f"min_chunk_min={task.min_chunk_min}"
                )
                result.skipped_task_ids.append(task.id)
                continue
            backlog.append(task)

        for task in sort_by_priority(backlog, now):
            remaining = task.est_min
            for day in days:
                if remaining <= 0:
                    break
                window = windows[day]
                if window is None:
                    continue

                busy = placed_by_day[day] + events_by_day[day]
                free_slots = compute_free_slots(window, busy, profile.buffer_min)
                if self.prefer_window_slots:
                    free_slots = sorted(
                        free_slots,
                        key=lambda slot: -window_score(
                            task.preferred_window, to_local(slot.start, tz)
                        ),
                    )
                chunks, _, remaining = allocate(
                    free_slots,
                    task,
                    remaining,
                    profile.focus_length_min,
                    profile.buffer_min,
                )
                for chunk in sorted(chunks, key=lambda slot: slot.start):
                    self._file_by_day(placed_by_day, chunk, tz)
                    result.blocks.append(
                        ScheduleBlockCreate(
                            block_type=BlockType.TASK,
                            ref_id=task.id,
                            title=task.title,
                            start_ts=chunk.start,
                            end_ts=chunk.end,
                            status=BlockStatus.SCHEDULED,
                            explanation=build_task_explanation(task, chunk.start, tz),
                        )
                    )

            if remaining < task.est_min:
                result.scheduled_task_ids.append(task.id)
            else:
                result.unscheduled_task_ids.append(task.id)
            if remaining > 0:
                logger.debug(f"Task {task.id}: {remaining} of {task.est_min} min left unplaced")

        logger.info(
            f"Placement: {len(habit_blocks)} habit blocks, "
            f"{len(result.blocks) - len(habit_blocks)} task blocks, "
            f"{len(result.scheduled_task_ids)}/{len(backlog)} tasks placed"
        )
        return result

    def _materialise_habits(
        self,
        habits: list[Habit],
        days: list[date],
        tz: ZoneInfo,
    ) -> list[ScheduleBlockCreate]:
        blocks: list[ScheduleBlockCreate] = []
        for habit in habits:
            recurrence = parse_recurrence(habit.recurrence_rrule)
            warn_unsupported(habit.name, recurrence, self.unsupported_recurrence_policy)
            explanation = PROTECTED_HABIT_EXPLANATION if habit.protected else HABIT_EXPLANATION
            for day in days:
                if not occurs_on(recurrence, day, self.unsupported_recurrence_policy):
                    continue
                start = ensure_utc(at_clock_time(day, habit.start_time, tz))
                blocks.append(
                    ScheduleBlockCreate(
                        block_type=BlockType.HABIT,
                        ref_id=habit.id,
                        title=habit.name,
                        start_ts=start,
                        end_ts=start + timedelta(minutes=habit.duration_min),
                        status=BlockStatus.SCHEDULED,
                        explanation=explanation,
                    )
                )
        blocks.sort(key=lambda block: block.start_ts)
        # Clashing habits are all kept; the user resolves them.
        latest: Optional[ScheduleBlockCreate] = None
        for block in blocks:
            if latest is not None and block.start_ts < latest.end_ts:
                logger.warning(
                    f"Habit '{block.title}' at {block.start_ts.isoformat()} overlaps "
                    f"habit '{latest.title}'"
                )
            if latest is None or block.end_ts > latest.end_ts:
                latest = block
        return blocks

    def _busy_event_slots(self, events: list[CalendarEvent]) -> list[TimeSlot]:
        return [
            TimeSlot(ensure_utc(event.start_ts), ensure_utc(event.end_ts))
            for event in events
            if event.is_busy or not self.respect_busy_flag
        ]

    @classmethod
    def _slots_by_day(
        cls,
        slots: list[TimeSlot],
        days: list[date],
        tz: ZoneInfo,
    ) -> dict[date, list[TimeSlot]]:
        by_day: dict[date, list[TimeSlot]] = {day: [] for day in days}
        for slot in slots:
            cls._file_by_day(by_day, slot, tz)
        return by_day

    @staticmethod
    def _file_by_day(by_day: dict[date, list[TimeSlot]], slot: TimeSlot, tz: ZoneInfo) -> None:
        """Add ``slot`` under every horizon day it overlaps, not only its start day."""
        for day, day_slots in by_day.items():
            day_start, day_end = day_bounds(day, tz)
            if slot.start < day_end and slot.end > day_start:
                day_slots.append(slot)
