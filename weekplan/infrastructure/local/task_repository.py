"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, func, select, update as sql_update

from weekplan.core.exceptions import NotFoundError, ValidationError
from weekplan.infrastructure.local.database import TaskORM, get_session_factory
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.models.enums import TaskStatus
from weekplan.models.task import Task, TaskCreate, TaskUpdate
from weekplan.utils.datetime_utils import ensure_utc, now_utc


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        return Task(
            id=UUID(orm.id),
            user_id=orm.user_id,
            title=orm.title,
            description=orm.description,
            priority=orm.priority,
            due_ts=ensure_utc(orm.due_ts),
            est_min=orm.est_min,
            min_chunk_min=orm.min_chunk_min,
            energy=orm.energy,
            preferred_window=orm.preferred_window,
            hard_deadline=bool(orm.hard_deadline),
            project_id=UUID(orm.project_id) if orm.project_id else None,
            status=TaskStatus(orm.status),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _get_orm(self, session, user_id: str, task_id: UUID) -> Optional[TaskORM]:
        result = await session.execute(
            select(TaskORM).where(
                and_(TaskORM.id == str(task_id), TaskORM.user_id == user_id)
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """Create a new task."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = TaskORM(
                id=str(uuid4()),
                user_id=user_id,
                title=task.title,
                description=task.description,
                priority=task.priority.value,
                due_ts=ensure_utc(task.due_ts),
                est_min=task.est_min,
                min_chunk_min=task.min_chunk_min,
                energy=task.energy.value,
                preferred_window=task.preferred_window.value,
                hard_deadline=task.hard_deadline,
                project_id=str(task.project_id) if task.project_id else None,
                status=task.status.value,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        user_id: str,
        status: Optional[TaskStatus] = None,
        project_id: Optional[UUID] = None,
        limit: int = 500,
        offset: int = 0,
    ) -> list[Task]:
        """List tasks, oldest first."""
        async with self._session_factory() as session:
            query = select(TaskORM).where(TaskORM.user_id == user_id)
            if status:
                query = query.where(TaskORM.status == TaskStatus(status).value)
            if project_id:
                query = query.where(TaskORM.project_id == str(project_id))
            query = query.order_by(TaskORM.created_at.asc(), TaskORM.id.asc())
            query = query.limit(limit).offset(offset)

            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_plannable(self, user_id: str) -> list[Task]:
        """List every backlog and scheduled task, oldest first."""
        plannable = [TaskStatus.BACKLOG.value, TaskStatus.SCHEDULED.value]
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .where(and_(TaskORM.user_id == user_id, TaskORM.status.in_(plannable)))
                .order_by(TaskORM.created_at.asc(), TaskORM.id.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def count_by_status(self, user_id: str) -> dict[str, int]:
        """Number of tasks per status value."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM.status, func.count(TaskORM.id))
                .where(TaskORM.user_id == user_id)
                .group_by(TaskORM.status)
            )
            return {status: count for status, count in result.all()}

    async def update(self, user_id: str, task_id: UUID, update: TaskUpdate) -> Task:
        """Update an existing task."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            if not orm:
                raise NotFoundError(f"Task {task_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                # None clears the optional references; other fields keep their value.
                if value is None and field not in ("due_ts", "project_id"):
                    continue
                if field == "due_ts":
                    value = ensure_utc(value)
                elif field == "project_id":
                    value = str(value) if value else None
                elif hasattr(value, "value"):
                    value = value.value
                setattr(orm, field, value)

            if orm.min_chunk_min > orm.est_min:
                await session.rollback()
                raise ValidationError(
                    "min_chunk_min must not exceed est_min",
                    details={"est_min": orm.est_min, "min_chunk_min": orm.min_chunk_min},
                )

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def set_status_many(
        self,
        user_id: str,
        task_ids: Iterable[UUID],
        status: TaskStatus,
    ) -> int:
        """Set the status of several tasks in one transaction."""
        ids = [str(task_id) for task_id in task_ids]
        if not ids:
            return 0
        async with self._session_factory() as session:
            result = await session.execute(
                sql_update(TaskORM)
                .where(and_(TaskORM.user_id == user_id, TaskORM.id.in_(ids)))
                .values(status=TaskStatus(status).value, updated_at=now_utc())
            )
            await session.commit()
            return result.rowcount or 0

    async def delete(self, user_id: str, task_id: UUID) -> bool:
        """Delete a task."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
