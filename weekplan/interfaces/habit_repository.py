"""
Habit repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from weekplan.models.habit import Habit, HabitCreate, HabitUpdate


class IHabitRepository(ABC):
    """Abstract interface for habit persistence."""

    @abstractmethod
    async def create(self, user_id: str, data: HabitCreate) -> Habit:
        pass

    @abstractmethod
    async def get(self, user_id: str, habit_id: UUID) -> Optional[Habit]:
        pass

    @abstractmethod
    async def list(self, user_id: str) -> list[Habit]:
        """List habits ordered by start time."""
        pass

    @abstractmethod
    async def update(self, user_id: str, habit_id: UUID, update: HabitUpdate) -> Habit:
        """Raises NotFoundError if the habit does not exist."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, habit_id: UUID) -> bool:
        pass
