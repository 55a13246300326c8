"""
Project API endpoints.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from weekplan.api.deps import CurrentUser, ProjectRepo, TaskRepo
from weekplan.core.exceptions import NotFoundError
from weekplan.models.enums import TaskStatus
from weekplan.models.project import Project, ProjectCreate, ProjectUpdate, ProjectWithTaskCount
from weekplan.models.task import Task

router = APIRouter()


async def _get_project_or_404(user: CurrentUser, repo: ProjectRepo, project_id: UUID) -> Project:
    project = await repo.get(user.id, project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return project


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    user: CurrentUser,
    repo: ProjectRepo,
) -> Project:
    """Create a new project."""
    return await repo.create(user.id, project)


@router.get("", response_model=list[ProjectWithTaskCount])
async def list_projects(
    user: CurrentUser,
    repo: ProjectRepo,
) -> list[ProjectWithTaskCount]:
    """List projects with task counts."""
    return await repo.list_with_task_count(user.id)


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: UUID,
    user: CurrentUser,
    repo: ProjectRepo,
) -> Project:
    return await _get_project_or_404(user, repo, project_id)


@router.get("/{project_id}/tasks", response_model=list[Task])
async def list_project_tasks(
    project_id: UUID,
    user: CurrentUser,
    repo: ProjectRepo,
    task_repo: TaskRepo,
    status_filter: Optional[TaskStatus] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(500, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> list[Task]:
    """Tasks belonging to a project, oldest first."""
    await _get_project_or_404(user, repo, project_id)
    return await task_repo.list(
        user.id,
        status=status_filter,
        project_id=project_id,
        limit=limit,
        offset=offset,
    )


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: UUID,
    update: ProjectUpdate,
    user: CurrentUser,
    repo: ProjectRepo,
) -> Project:
    try:
        return await repo.update(user.id, project_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    user: CurrentUser,
    repo: ProjectRepo,
):
    """Delete a project; its tasks stay, without a project."""
    deleted = await repo.delete(user.id, project_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
