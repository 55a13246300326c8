"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from weekplan.core.config import get_settings
from weekplan.interfaces.auth_provider import IAuthProvider, User
from weekplan.interfaces.event_repository import ICalendarEventRepository
from weekplan.interfaces.habit_repository import IHabitRepository
from weekplan.interfaces.profile_repository import IProfileRepository
from weekplan.interfaces.project_repository import IProjectRepository
from weekplan.interfaces.schedule_block_repository import IScheduleBlockRepository
from weekplan.interfaces.task_repository import ITaskRepository


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from weekplan.infrastructure.local.task_repository import SqliteTaskRepository
    return SqliteTaskRepository()


@lru_cache()
def get_habit_repository() -> IHabitRepository:
    """Get habit repository instance."""
    from weekplan.infrastructure.local.habit_repository import SqliteHabitRepository
    return SqliteHabitRepository()


@lru_cache()
def get_event_repository() -> ICalendarEventRepository:
    """Get calendar event repository instance."""
    from weekplan.infrastructure.local.event_repository import SqliteCalendarEventRepository
    return SqliteCalendarEventRepository()


@lru_cache()
def get_profile_repository() -> IProfileRepository:
    """Get profile repository instance."""
    from weekplan.infrastructure.local.profile_repository import SqliteProfileRepository
    return SqliteProfileRepository()


@lru_cache()
def get_project_repository() -> IProjectRepository:
    """Get project repository instance."""
    from weekplan.infrastructure.local.project_repository import SqliteProjectRepository
    return SqliteProjectRepository()


@lru_cache()
def get_schedule_block_repository() -> IScheduleBlockRepository:
    """Get schedule block repository instance."""
    from weekplan.infrastructure.local.schedule_block_repository import (
        SqliteScheduleBlockRepository,
    )
    return SqliteScheduleBlockRepository()


# ===========================================
# Auth Dependencies
# ===========================================


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from weekplan.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_ENABLED)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With auth disabled every request acts as the development user.
    """
    if not auth_provider.is_enabled():
        from weekplan.infrastructure.local.mock_auth import DEV_USER
        return DEV_USER

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

TaskRepo = Annotated[ITaskRepository, Depends(get_task_repository)]
HabitRepo = Annotated[IHabitRepository, Depends(get_habit_repository)]
EventRepo = Annotated[ICalendarEventRepository, Depends(get_event_repository)]
ProfileRepo = Annotated[IProfileRepository, Depends(get_profile_repository)]
ProjectRepo = Annotated[IProjectRepository, Depends(get_project_repository)]
ScheduleBlockRepo = Annotated[IScheduleBlockRepository, Depends(get_schedule_block_repository)]
CurrentUser = Annotated[User, Depends(get_current_user)]
