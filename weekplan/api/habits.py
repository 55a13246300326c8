"""
Habit API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from weekplan.api.deps import CurrentUser, HabitRepo
from weekplan.core.exceptions import NotFoundError
from weekplan.models.habit import Habit, HabitCreate, HabitUpdate

router = APIRouter()


@router.post("", response_model=Habit, status_code=status.HTTP_201_CREATED)
async def create_habit(
    habit: HabitCreate,
    user: CurrentUser,
    repo: HabitRepo,
) -> Habit:
    """Create a recurring habit."""
    return await repo.create(user.id, habit)


@router.get("", response_model=list[Habit])
async def list_habits(
    user: CurrentUser,
    repo: HabitRepo,
) -> list[Habit]:
    """List habits ordered by start time."""
    return await repo.list(user.id)


@router.get("/{habit_id}", response_model=Habit)
async def get_habit(
    habit_id: UUID,
    user: CurrentUser,
    repo: HabitRepo,
) -> Habit:
    habit = await repo.get(user.id, habit_id)
    if not habit:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Habit {habit_id} not found",
        )
    return habit


@router.patch("/{habit_id}", response_model=Habit)
async def update_habit(
    habit_id: UUID,
    update: HabitUpdate,
    user: CurrentUser,
    repo: HabitRepo,
) -> Habit:
    try:
        return await repo.update(user.id, habit_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(
    habit_id: UUID,
    user: CurrentUser,
    repo: HabitRepo,
):
    deleted = await repo.delete(user.id, habit_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Habit {habit_id} not found",
        )
