"""
SQLite implementation of habit repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select

from weekplan.core.exceptions import NotFoundError
from weekplan.infrastructure.local.database import HabitORM, get_session_factory
from weekplan.interfaces.habit_repository import IHabitRepository
from weekplan.models.habit import DEFAULT_HABIT_COLOR, Habit, HabitCreate, HabitUpdate
from weekplan.utils.datetime_utils import ensure_utc, now_utc


class SqliteHabitRepository(IHabitRepository):
    """SQLite implementation of habit repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: HabitORM) -> Habit:
        return Habit(
            id=UUID(orm.id),
            user_id=orm.user_id,
            name=orm.name,
            start_time=orm.start_time,
            duration_min=orm.duration_min,
            protected=bool(orm.protected),
            recurrence_rrule=orm.recurrence_rrule or "",
            color=orm.color or DEFAULT_HABIT_COLOR,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _get_orm(self, session, user_id: str, habit_id: UUID) -> Optional[HabitORM]:
        result = await session.execute(
            select(HabitORM).where(
                and_(HabitORM.id == str(habit_id), HabitORM.user_id == user_id)
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: str, data: HabitCreate) -> Habit:
        async with self._session_factory() as session:
            now = now_utc()
            orm = HabitORM(
                id=str(uuid4()),
                user_id=user_id,
                name=data.name,
                start_time=data.start_time,
                duration_min=data.duration_min,
                protected=data.protected,
                recurrence_rrule=data.recurrence_rrule,
                color=data.color,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, habit_id: UUID) -> Optional[Habit]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, habit_id)
            return self._orm_to_model(orm) if orm else None

    async def list(self, user_id: str) -> list[Habit]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(HabitORM)
                .where(HabitORM.user_id == user_id)
                .order_by(HabitORM.start_time.asc(), HabitORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(self, user_id: str, habit_id: UUID, update: HabitUpdate) -> Habit:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, habit_id)
            if not orm:
                raise NotFoundError(f"Habit {habit_id} not found")

            for field, value in update.model_dump(exclude_unset=True).items():
                if value is None:
                    continue
                setattr(orm, field, value)

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, habit_id: UUID) -> bool:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, habit_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
