"""
Schedule block repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from weekplan.models.enums import BlockStatus
from weekplan.models.schedule import ScheduleBlock, ScheduleBlockCreate, ScheduleBlockUpdate


class IScheduleBlockRepository(ABC):
    """Abstract interface for schedule block persistence."""

    @abstractmethod
    async def list(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[ScheduleBlock]:
        """List blocks overlapping [start, end), ordered by start."""
        pass

    @abstractmethod
    async def get(self, user_id: str, block_id: UUID) -> Optional[ScheduleBlock]:
        pass

    @abstractmethod
    async def replace_all(
        self,
        user_id: str,
        blocks: list[ScheduleBlockCreate],
    ) -> list[ScheduleBlock]:
        """
        Delete every stored block of the user and insert the given ones.

        Both steps share one transaction: on failure the previous schedule
        is left untouched.
        """
        pass

    @abstractmethod
    async def update(
        self, user_id: str, block_id: UUID, update: ScheduleBlockUpdate
    ) -> ScheduleBlock:
        """Raises NotFoundError if the block does not exist."""
        pass

    @abstractmethod
    async def set_status_for_ref(
        self, user_id: str, ref_id: UUID, status: BlockStatus
    ) -> int:
        """Set the status of every block referencing one source entity."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, block_id: UUID) -> bool:
        pass
