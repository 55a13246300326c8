"""
Task repository interface.

Defines the contract for task persistence operations.
Implementations: SQLite
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from uuid import UUID

from weekplan.models.enums import TaskStatus
from weekplan.models.task import Task, TaskCreate, TaskUpdate


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            user_id: Owner user ID
            task: Task creation data

        Returns:
            Created task with generated ID and timestamps
        """
        pass

    @abstractmethod
    async def get(self, user_id: str, task_id: UUID) -> Optional[Task]:
        """
        Get a task by ID.

        Returns:
            Task if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        user_id: str,
        status: Optional[TaskStatus] = None,
        project_id: Optional[UUID] = None,
        limit: int = 500,
        offset: int = 0,
    ) -> list[Task]:
        """
        List one page of tasks, oldest first.

        Args:
            user_id: Owner user ID
            status: Filter by status
            project_id: Filter by project
            limit: Page size
            offset: Page offset
        """
        pass

    @abstractmethod
    async def list_plannable(self, user_id: str) -> list[Task]:
        """
        List every backlog and scheduled task, oldest first, without paging.

        The planner relies on this order to break priority ties.
        """
        pass

    @abstractmethod
    async def count_by_status(self, user_id: str) -> dict[str, int]:
        """Number of tasks per status value; statuses with no tasks are omitted."""
        pass

    @abstractmethod
    async def update(self, user_id: str, task_id: UUID, update: TaskUpdate) -> Task:
        """
        Update an existing task.

        Raises:
            NotFoundError: If task not found
            ValidationError: If the result has min_chunk_min > est_min
        """
        pass

    @abstractmethod
    async def set_status_many(
        self,
        user_id: str,
        task_ids: Iterable[UUID],
        status: TaskStatus,
    ) -> int:
        """
        Set the status of several tasks in one transaction.

        Returns:
            Number of tasks updated
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, task_id: UUID) -> bool:
        """
        Delete a task.

        Returns:
            True if deleted, False if not found
        """
        pass
