"""
Calendar event repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from weekplan.models.event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    CalendarSyncResult,
)


class ICalendarEventRepository(ABC):
    """Abstract interface for calendar event persistence."""

    @abstractmethod
    async def create(self, user_id: str, data: CalendarEventCreate) -> CalendarEvent:
        pass

    @abstractmethod
    async def get(self, user_id: str, event_id: UUID) -> Optional[CalendarEvent]:
        pass

    @abstractmethod
    async def list_overlapping(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[CalendarEvent]:
        """List events intersecting [start, end), ordered by start."""
        pass

    @abstractmethod
    async def update(
        self, user_id: str, event_id: UUID, update: CalendarEventUpdate
    ) -> CalendarEvent:
        """Raises NotFoundError if the event does not exist."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, event_id: UUID) -> bool:
        pass

    @abstractmethod
    async def replace_source(
        self,
        user_id: str,
        source: str,
        events: list[CalendarEventCreate],
    ) -> CalendarSyncResult:
        """Replace every event of one source in a single transaction."""
        pass
