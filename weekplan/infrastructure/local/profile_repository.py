"""
SQLite implementation of profile repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from weekplan.core.config import get_settings
from weekplan.infrastructure.local.database import ProfileORM, get_session_factory
from weekplan.interfaces.profile_repository import IProfileRepository
from weekplan.models.profile import (
    DEFAULT_BUFFER_MIN,
    DEFAULT_FOCUS_LENGTH_MIN,
    Profile,
    ProfileUpdate,
    WorkingHours,
    default_working_hours,
)
from weekplan.utils.datetime_utils import ensure_utc, now_utc


class SqliteProfileRepository(IProfileRepository):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ProfileORM) -> Profile:
        return Profile(
            user_id=orm.user_id,
            timezone=orm.timezone,
            working_hours=WorkingHours(**(orm.working_hours_json or {})),
            focus_length_min=orm.focus_length_min,
            buffer_min=orm.buffer_min,
            onboarding_completed=bool(orm.onboarding_completed),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def get(self, user_id: str) -> Optional[Profile]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProfileORM).where(ProfileORM.user_id == user_id)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def upsert(self, user_id: str, update: ProfileUpdate) -> Profile:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProfileORM).where(ProfileORM.user_id == user_id)
            )
            orm = result.scalar_one_or_none()
            now = now_utc()
            if orm:
                if update.timezone is not None:
                    orm.timezone = update.timezone
                if update.working_hours is not None:
                    orm.working_hours_json = update.working_hours.model_dump(mode="json")
                if update.focus_length_min is not None:
                    orm.focus_length_min = update.focus_length_min
                if update.buffer_min is not None:
                    orm.buffer_min = update.buffer_min
                if update.onboarding_completed is not None:
                    orm.onboarding_completed = update.onboarding_completed
                orm.updated_at = now
            else:
                working_hours = update.working_hours or default_working_hours()
                orm = ProfileORM(
                    user_id=user_id,
                    timezone=update.timezone or get_settings().DEFAULT_TIMEZONE,
                    working_hours_json=working_hours.model_dump(mode="json"),
                    focus_length_min=(
                        update.focus_length_min
                        if update.focus_length_min is not None
                        else DEFAULT_FOCUS_LENGTH_MIN
                    ),
                    buffer_min=(
                        update.buffer_min if update.buffer_min is not None else DEFAULT_BUFFER_MIN
                    ),
                    onboarding_completed=bool(update.onboarding_completed),
                    created_at=now,
                    updated_at=now,
                )
                session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
