"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class TaskPriority(str, Enum):
    """Priority tier, most to least urgent."""

    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P4 = "p4"


class TaskStatus(str, Enum):
    """Task lifecycle status."""

    BACKLOG = "backlog"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    SNOOZED = "snoozed"


class EnergyLevel(str, Enum):
    """
    Energy level required for a task.

    Carried through planning but not used for placement.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeWindow(str, Enum):
    """Preferred time of day for a task."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"


class BlockType(str, Enum):
    """What a schedule block represents."""

    TASK = "task"
    HABIT = "habit"
    EVENT = "event"


class BlockStatus(str, Enum):
    """Schedule block status."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RecurrenceKind(str, Enum):
    """Shape of a habit recurrence rule."""

    DAILY = "daily"
    WEEKLY_BY_DAY = "weekly_by_day"
    UNSUPPORTED = "unsupported"
