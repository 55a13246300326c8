"""
SQLite implementation of Project repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, case, func, select, update as sql_update

from weekplan.core.exceptions import NotFoundError
from weekplan.infrastructure.local.database import ProjectORM, TaskORM, get_session_factory
from weekplan.interfaces.project_repository import IProjectRepository
from weekplan.models.enums import TaskStatus
from weekplan.models.project import (
    DEFAULT_PROJECT_COLOR,
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProjectWithTaskCount,
)
from weekplan.utils.datetime_utils import ensure_utc, now_utc


class SqliteProjectRepository(IProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ProjectORM) -> Project:
        """Convert ORM object to Pydantic model."""
        return Project(
            id=UUID(orm.id),
            user_id=orm.user_id,
            name=orm.name,
            color=orm.color or DEFAULT_PROJECT_COLOR,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _get_orm(self, session, user_id: str, project_id: UUID) -> Optional[ProjectORM]:
        result = await session.execute(
            select(ProjectORM).where(
                and_(ProjectORM.id == str(project_id), ProjectORM.user_id == user_id)
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: str, project: ProjectCreate) -> Project:
        """Create a new project."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = ProjectORM(
                id=str(uuid4()),
                user_id=user_id,
                name=project.name,
                color=project.color,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, project_id: UUID) -> Optional[Project]:
        """Get a project by ID."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, project_id)
            return self._orm_to_model(orm) if orm else None

    async def list(self, user_id: str) -> list[Project]:
        """List projects, oldest first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM)
                .where(ProjectORM.user_id == user_id)
                .order_by(ProjectORM.created_at.asc(), ProjectORM.id.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_with_task_count(self, user_id: str) -> list[ProjectWithTaskCount]:
        """List projects with task statistics."""
        completed = case((TaskORM.status == TaskStatus.DONE.value, 1), else_=0)
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM, func.count(TaskORM.id), func.coalesce(func.sum(completed), 0))
                .outerjoin(
                    TaskORM,
                    and_(TaskORM.project_id == ProjectORM.id, TaskORM.user_id == user_id),
                )
                .where(ProjectORM.user_id == user_id)
                .group_by(ProjectORM.id)
                .order_by(ProjectORM.created_at.asc(), ProjectORM.id.asc())
            )
            return [
                ProjectWithTaskCount(
                    **self._orm_to_model(orm).model_dump(),
                    total_tasks=total,
                    completed_tasks=done,
                )
                for orm, total, done in result.all()
            ]

    async def update(self, user_id: str, project_id: UUID, update: ProjectUpdate) -> Project:
        """Update an existing project."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, project_id)
            if not orm:
                raise NotFoundError(f"Project {project_id} not found")

            for field, value in update.model_dump(exclude_unset=True).items():
                if value is None:
                    continue
                setattr(orm, field, value)

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, project_id: UUID) -> bool:
        """Delete a project and detach its tasks."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, project_id)
            if not orm:
                return False

            await session.execute(
                sql_update(TaskORM)
                .where(and_(TaskORM.user_id == user_id, TaskORM.project_id == str(project_id)))
                .values(project_id=None, updated_at=now_utc())
            )
            await session.delete(orm)
            await session.commit()
            return True
