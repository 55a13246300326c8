"""
SQLite implementation of calendar event repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select

from weekplan.core.exceptions import NotFoundError, ValidationError
from weekplan.infrastructure.local.database import CalendarEventORM, get_session_factory
from weekplan.interfaces.event_repository import ICalendarEventRepository
from weekplan.models.event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    CalendarSyncResult,
)
from weekplan.utils.datetime_utils import ensure_utc, now_utc


class SqliteCalendarEventRepository(ICalendarEventRepository):
    """SQLite implementation of calendar event repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: CalendarEventORM) -> CalendarEvent:
        return CalendarEvent(
            id=UUID(orm.id),
            user_id=orm.user_id,
            external_id=orm.external_id,
            source=orm.source,
            title=orm.title,
            description=orm.description,
            start_ts=ensure_utc(orm.start_ts),
            end_ts=ensure_utc(orm.end_ts),
            is_busy=bool(orm.is_busy),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _new_orm(self, user_id: str, data: CalendarEventCreate) -> CalendarEventORM:
        now = now_utc()
        return CalendarEventORM(
            id=str(uuid4()),
            user_id=user_id,
            external_id=data.external_id,
            source=data.source,
            title=data.title,
            description=data.description,
            start_ts=ensure_utc(data.start_ts),
            end_ts=ensure_utc(data.end_ts),
            is_busy=data.is_busy,
            created_at=now,
            updated_at=now,
        )

    async def _get_orm(self, session, user_id: str, event_id: UUID) -> Optional[CalendarEventORM]:
        result = await session.execute(
            select(CalendarEventORM).where(
                and_(CalendarEventORM.id == str(event_id), CalendarEventORM.user_id == user_id)
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: str, data: CalendarEventCreate) -> CalendarEvent:
        async with self._session_factory() as session:
            orm = self._new_orm(user_id, data)
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, event_id: UUID) -> Optional[CalendarEvent]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, event_id)
            return self._orm_to_model(orm) if orm else None

    async def list_overlapping(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[CalendarEvent]:
        async with self._session_factory() as session:
            conditions = [CalendarEventORM.user_id == user_id]
            if start is not None:
                conditions.append(CalendarEventORM.end_ts > ensure_utc(start))
            if end is not None:
                conditions.append(CalendarEventORM.start_ts < ensure_utc(end))
            result = await session.execute(
                select(CalendarEventORM)
                .where(and_(*conditions))
                .order_by(CalendarEventORM.start_ts.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(
        self, user_id: str, event_id: UUID, update: CalendarEventUpdate
    ) -> CalendarEvent:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, event_id)
            if not orm:
                raise NotFoundError(f"CalendarEvent {event_id} not found")

            for field, value in update.model_dump(exclude_unset=True).items():
                if value is None:
                    continue
                if field in ("start_ts", "end_ts"):
                    value = ensure_utc(value)
                setattr(orm, field, value)

            if ensure_utc(orm.end_ts) <= ensure_utc(orm.start_ts):
                await session.rollback()
                raise ValidationError("end_ts must be after start_ts")

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, event_id: UUID) -> bool:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, event_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True

    async def replace_source(
        self,
        user_id: str,
        source: str,
        events: list[CalendarEventCreate],
    ) -> CalendarSyncResult:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    delete(CalendarEventORM).where(
                        and_(
                            CalendarEventORM.user_id == user_id,
                            CalendarEventORM.source == source,
                        )
                    )
                )
                removed = result.rowcount or 0
                for event in events:
                    session.add(self._new_orm(user_id, event.model_copy(update={"source": source})))
            return CalendarSyncResult(source=source, removed=removed, created=len(events))
