"""Pydantic models (schemas) for the application."""

from weekplan.models.enums import (
    BlockStatus,
    BlockType,
    EnergyLevel,
    RecurrenceKind,
    TaskPriority,
    TaskStatus,
    TimeWindow,
)
from weekplan.models.event import CalendarEvent, CalendarEventCreate, CalendarEventUpdate
from weekplan.models.habit import Habit, HabitCreate, HabitUpdate
from weekplan.models.project import (
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProjectWithTaskCount,
)
from weekplan.models.profile import DayHours, Profile, ProfileUpdate, WorkingHours
from weekplan.models.schedule import (
    PlanningRunResult,
    ScheduleBlock,
    ScheduleBlockCreate,
    ScheduleBlockUpdate,
    WeeklyStats,
)
from weekplan.models.task import Task, TaskCreate, TaskUpdate

__all__ = [
    # Enums
    "BlockStatus",
    "BlockType",
    "EnergyLevel",
    "RecurrenceKind",
    "TaskPriority",
    "TaskStatus",
    "TimeWindow",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Project
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectWithTaskCount",
    # Habit
    "Habit",
    "HabitCreate",
    "HabitUpdate",
    # Event
    "CalendarEvent",
    "CalendarEventCreate",
    "CalendarEventUpdate",
    # Profile
    "DayHours",
    "Profile",
    "ProfileUpdate",
    "WorkingHours",
    # Schedule
    "PlanningRunResult",
    "ScheduleBlock",
    "ScheduleBlockCreate",
    "ScheduleBlockUpdate",
    "WeeklyStats",
]
