"""
Task API endpoints.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from weekplan.api.deps import CurrentUser, ProjectRepo, ScheduleBlockRepo, TaskRepo
from weekplan.core.exceptions import NotFoundError, ValidationError
from weekplan.models.enums import BlockStatus, TaskStatus
from weekplan.models.task import Task, TaskCreate, TaskUpdate

router = APIRouter()


async def _ensure_project(user: CurrentUser, project_repo: ProjectRepo, project_id: Optional[UUID]):
    if project_id is not None and not await project_repo.get(user.id, project_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Project {project_id} not found",
        )


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    user: CurrentUser,
    repo: TaskRepo,
    project_repo: ProjectRepo,
) -> Task:
    """Create a new task."""
    await _ensure_project(user, project_repo, task.project_id)
    return await repo.create(user.id, task)


@router.get("", response_model=list[Task])
async def list_tasks(
    user: CurrentUser,
    repo: TaskRepo,
    status_filter: Optional[TaskStatus] = Query(None, alias="status", description="Filter by status"),
    project_id: Optional[UUID] = Query(None, description="Filter by project"),
    limit: int = Query(500, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> list[Task]:
    """List tasks, oldest first."""
    return await repo.list(
        user.id,
        status=status_filter,
        project_id=project_id,
        limit=limit,
        offset=offset,
    )


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: UUID,
    user: CurrentUser,
    repo: TaskRepo,
) -> Task:
    """Get a task by ID."""
    task = await repo.get(user.id, task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return task


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: UUID,
    update: TaskUpdate,
    user: CurrentUser,
    repo: TaskRepo,
    project_repo: ProjectRepo,
) -> Task:
    """Update a task."""
    await _ensure_project(user, project_repo, update.project_id)
    try:
        return await repo.update(user.id, task_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    user: CurrentUser,
    repo: TaskRepo,
):
    """Delete a task."""
    deleted = await repo.delete(user.id, task_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )


@router.post("/{task_id}/complete", response_model=Task)
async def complete_task(
    task_id: UUID,
    user: CurrentUser,
    repo: TaskRepo,
    block_repo: ScheduleBlockRepo,
) -> Task:
    """Mark a task done and complete every block placed for it."""
    try:
        task = await repo.update(user.id, task_id, TaskUpdate(status=TaskStatus.DONE))
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    await block_repo.set_status_for_ref(user.id, task_id, BlockStatus.COMPLETED)
    return task


@router.post("/{task_id}/reopen", response_model=Task)
async def reopen_task(
    task_id: UUID,
    user: CurrentUser,
    repo: TaskRepo,
) -> Task:
    """Move a task back to the backlog."""
    try:
        return await repo.update(user.id, task_id, TaskUpdate(status=TaskStatus.BACKLOG))
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
