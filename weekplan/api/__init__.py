"""API routers."""

from weekplan.api import (
    events,
    habits,
    profile,
    projects,
    schedule,
    tasks,
)

__all__ = [
    "events",
    "habits",
    "profile",
    "projects",
    "schedule",
    "tasks",
]
