"""Abstract interfaces for infrastructure abstraction."""

from weekplan.interfaces.auth_provider import IAuthProvider, User
from weekplan.interfaces.event_repository import ICalendarEventRepository
from weekplan.interfaces.habit_repository import IHabitRepository
from weekplan.interfaces.profile_repository import IProfileRepository
from weekplan.interfaces.project_repository import IProjectRepository
from weekplan.interfaces.schedule_block_repository import IScheduleBlockRepository
from weekplan.interfaces.task_repository import ITaskRepository

__all__ = [
    "IAuthProvider",
    "ICalendarEventRepository",
    "IHabitRepository",
    "IProfileRepository",
    "IProjectRepository",
    "IScheduleBlockRepository",
    "ITaskRepository",
    "User",
]
