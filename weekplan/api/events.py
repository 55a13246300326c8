"""
Calendar event API endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from weekplan.api.deps import CurrentUser, EventRepo
from weekplan.core.exceptions import NotFoundError, ValidationError
from weekplan.models.event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    CalendarSyncResult,
)

router = APIRouter()


@router.post("", response_model=CalendarEvent, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: CalendarEventCreate,
    user: CurrentUser,
    repo: EventRepo,
) -> CalendarEvent:
    """Create a calendar event."""
    return await repo.create(user.id, event)


@router.get("", response_model=list[CalendarEvent])
async def list_events(
    user: CurrentUser,
    repo: EventRepo,
    start: Optional[datetime] = Query(None, description="Only events ending after this time"),
    end: Optional[datetime] = Query(None, description="Only events starting before this time"),
) -> list[CalendarEvent]:
    """List events intersecting the given range."""
    return await repo.list_overlapping(user.id, start, end)


@router.put("/sync/{source}", response_model=CalendarSyncResult)
async def sync_events(
    source: str,
    events: list[CalendarEventCreate],
    user: CurrentUser,
    repo: EventRepo,
) -> CalendarSyncResult:
    """Replace every event of one source with the given list."""
    return await repo.replace_source(user.id, source, events)


@router.get("/{event_id}", response_model=CalendarEvent)
async def get_event(
    event_id: UUID,
    user: CurrentUser,
    repo: EventRepo,
) -> CalendarEvent:
    event = await repo.get(user.id, event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CalendarEvent {event_id} not found",
        )
    return event


@router.patch("/{event_id}", response_model=CalendarEvent)
async def update_event(
    event_id: UUID,
    update: CalendarEventUpdate,
    user: CurrentUser,
    repo: EventRepo,
) -> CalendarEvent:
    try:
        return await repo.update(user.id, event_id, update)
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


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    user: CurrentUser,
    repo: EventRepo,
):
    deleted = await repo.delete(user.id, event_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CalendarEvent {event_id} not found",
        )
