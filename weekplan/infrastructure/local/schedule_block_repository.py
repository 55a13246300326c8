"""
SQLite implementation of schedule block repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select, update as sql_update

from weekplan.core.exceptions import NotFoundError
from weekplan.infrastructure.local.database import ScheduleBlockORM, get_session_factory
from weekplan.interfaces.schedule_block_repository import IScheduleBlockRepository
from weekplan.models.enums import BlockStatus
from weekplan.models.schedule import ScheduleBlock, ScheduleBlockCreate, ScheduleBlockUpdate
from weekplan.utils.datetime_utils import ensure_utc, now_utc


class SqliteScheduleBlockRepository(IScheduleBlockRepository):
    """SQLite implementation of schedule block repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ScheduleBlockORM) -> ScheduleBlock:
        return ScheduleBlock(
            id=UUID(orm.id),
            user_id=orm.user_id,
            block_type=orm.block_type,
            ref_id=UUID(orm.ref_id) if orm.ref_id else None,
            title=orm.title,
            start_ts=ensure_utc(orm.start_ts),
            end_ts=ensure_utc(orm.end_ts),
            status=orm.status,
            explanation=orm.explanation,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _get_orm(self, session, user_id: str, block_id: UUID) -> Optional[ScheduleBlockORM]:
        result = await session.execute(
            select(ScheduleBlockORM).where(
                and_(ScheduleBlockORM.id == str(block_id), ScheduleBlockORM.user_id == user_id)
            )
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[ScheduleBlock]:
        async with self._session_factory() as session:
            conditions = [ScheduleBlockORM.user_id == user_id]
            # Overlap, so blocks crossing either edge of the range are included.
            if start is not None:
                conditions.append(ScheduleBlockORM.end_ts > ensure_utc(start))
            if end is not None:
                conditions.append(ScheduleBlockORM.start_ts < ensure_utc(end))
            result = await session.execute(
                select(ScheduleBlockORM)
                .where(and_(*conditions))
                .order_by(ScheduleBlockORM.start_ts.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def get(self, user_id: str, block_id: UUID) -> Optional[ScheduleBlock]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, block_id)
            return self._orm_to_model(orm) if orm else None

    async def replace_all(
        self,
        user_id: str,
        blocks: list[ScheduleBlockCreate],
    ) -> list[ScheduleBlock]:
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(
                    delete(ScheduleBlockORM).where(ScheduleBlockORM.user_id == user_id)
                )
                now = now_utc()
                orms = [
                    ScheduleBlockORM(
                        id=str(uuid4()),
                        user_id=user_id,
                        block_type=block.block_type.value,
                        ref_id=str(block.ref_id) if block.ref_id else None,
                        title=block.title,
                        start_ts=ensure_utc(block.start_ts),
                        end_ts=ensure_utc(block.end_ts),
                        status=block.status.value,
                        explanation=block.explanation,
                        created_at=now,
                        updated_at=now,
                    )
                    for block in blocks
                ]
                session.add_all(orms)
                await session.flush()
            return [self._orm_to_model(orm) for orm in orms]

    async def update(
        self, user_id: str, block_id: UUID, update: ScheduleBlockUpdate
    ) -> ScheduleBlock:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, block_id)
            if not orm:
                raise NotFoundError(f"ScheduleBlock {block_id} not found")

            if update.status is not None:
                orm.status = update.status.value
            if update.explanation is not None:
                orm.explanation = update.explanation
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def set_status_for_ref(
        self, user_id: str, ref_id: UUID, status: BlockStatus
    ) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                sql_update(ScheduleBlockORM)
                .where(
                    and_(
                        ScheduleBlockORM.user_id == user_id,
                        ScheduleBlockORM.ref_id == str(ref_id),
                    )
                )
                .values(status=BlockStatus(status).value, updated_at=now_utc())
            )
            await session.commit()
            return result.rowcount or 0

    async def delete(self, user_id: str, block_id: UUID) -> bool:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, block_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
