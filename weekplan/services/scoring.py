"""
Scores used to order tasks and annotate placements.
"""

from __future__ import annotations

from datetime import datetime

from weekplan.models.enums import TaskPriority, TimeWindow
from weekplan.models.task import Task
from weekplan.utils.datetime_utils import ensure_utc

PRIORITY_BASE_SCORES: dict[TaskPriority, float] = {
    TaskPriority.P1: 100.0,
    TaskPriority.P2: 75.0,
    TaskPriority.P3: 50.0,
    TaskPriority.P4: 25.0,
}
HARD_DEADLINE_BONUS = 50.0
DUE_BONUS_MAX = 30.0
DUE_BONUS_DECAY_PER_DAY = 5.0

# Clock-hour bands [start, end) per preferred window.
WINDOW_HOURS: dict[TimeWindow, tuple[int, int]] = {
    TimeWindow.MORNING: (6, 12),
    TimeWindow.AFTERNOON: (12, 17),
    TimeWindow.EVENING: (17, 22),
}
WINDOW_MATCH_SCORE = 20
WINDOW_ANY_SCORE = 10
WINDOW_MISS_SCORE = 0


def due_bonus(task: Task, now: datetime) -> float:
    """Urgency bonus from due-date proximity; overdue tasks get the maximum."""
    if task.due_ts is None:
        return 0.0
    seconds = (ensure_utc(task.due_ts) - ensure_utc(now)).total_seconds()
    days_until_due = max(0.0, seconds / 86400)
    return max(0.0, DUE_BONUS_MAX - DUE_BONUS_DECAY_PER_DAY * days_until_due)


def priority_score(task: Task, now: datetime) -> float:
    """Urgency score; only meaningful relative to other tasks."""
    score = PRIORITY_BASE_SCORES[TaskPriority(task.priority)]
    if task.hard_deadline:
        score += HARD_DEADLINE_BONUS
    return score + due_bonus(task, now)


def sort_by_priority(tasks: list[Task], now: datetime) -> list[Task]:
    """Most urgent first; equal scores keep their listing order."""
    return sorted(tasks, key=lambda task: priority_score(task, now), reverse=True)


def window_score(preferred_window: TimeWindow, slot_start: datetime) -> int:
    """Bonus for starting a chunk inside the task's preferred window.

    ``slot_start`` must already be in the user's timezone.
    """
    preferred_window = TimeWindow(preferred_window)
    if preferred_window == TimeWindow.ANY:
        return WINDOW_ANY_SCORE
    first_hour, last_hour = WINDOW_HOURS[preferred_window]
    if first_hour <= slot_start.hour < last_hour:
        return WINDOW_MATCH_SCORE
    return WINDOW_MISS_SCORE
