"""
Project repository interface.

Defines the contract for project persistence operations.
Implementations: SQLite
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from weekplan.models.project import Project, ProjectCreate, ProjectUpdate, ProjectWithTaskCount


class IProjectRepository(ABC):
    """Abstract interface for project persistence."""

    @abstractmethod
    async def create(self, user_id: str, project: ProjectCreate) -> Project:
        """
        Create a new project.

        Args:
            user_id: Owner user ID
            project: Project creation data

        Returns:
            Created project with generated ID
        """
        pass

    @abstractmethod
    async def get(self, user_id: str, project_id: UUID) -> Optional[Project]:
        """
        Get a project by ID.

        Returns:
            Project if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(self, user_id: str) -> list[Project]:
        """List projects, oldest first."""
        pass

    @abstractmethod
    async def list_with_task_count(self, user_id: str) -> list[ProjectWithTaskCount]:
        """List projects with total and completed task counts."""
        pass

    @abstractmethod
    async def update(self, user_id: str, project_id: UUID, update: ProjectUpdate) -> Project:
        """
        Update an existing project.

        Raises:
            NotFoundError: If project not found
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, project_id: UUID) -> bool:
        """
        Delete a project; its tasks are kept without a project.

        Returns:
            True if deleted, False if not found
        """
        pass
