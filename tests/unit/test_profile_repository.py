"""
Unit tests for Profile and Habit repositories.
"""

import pytest

from weekplan.core.exceptions import NotFoundError
from weekplan.infrastructure.local.habit_repository import SqliteHabitRepository
from weekplan.infrastructure.local.profile_repository import SqliteProfileRepository
from weekplan.models.habit import DEFAULT_HABIT_COLOR, HabitCreate, HabitUpdate
from weekplan.models.profile import DayHours, ProfileUpdate, WorkingHours


@pytest.mark.asyncio
async def test_get_missing_profile_returns_none(session_factory, test_user_id):
    repo = SqliteProfileRepository(session_factory=session_factory)
    assert await repo.get(test_user_id) is None


@pytest.mark.asyncio
async def test_upsert_creates_with_defaults(session_factory, test_user_id):
    repo = SqliteProfileRepository(session_factory=session_factory)

    profile = await repo.upsert(test_user_id, ProfileUpdate())

    assert profile.timezone == "UTC"
    assert profile.focus_length_min == 90
    assert profile.buffer_min == 5
    assert profile.working_hours.monday == DayHours(start="09:00", end="17:00")
    assert profile.working_hours.saturday is None


@pytest.mark.asyncio
async def test_upsert_updates_partially(session_factory, test_user_id):
    repo = SqliteProfileRepository(session_factory=session_factory)
    await repo.upsert(test_user_id, ProfileUpdate(timezone="Europe/Berlin"))

    profile = await repo.upsert(
        test_user_id,
        ProfileUpdate(
            buffer_min=10,
            working_hours=WorkingHours(tuesday=DayHours(start="10:00", end="14:00")),
        ),
    )

    assert profile.timezone == "Europe/Berlin"
    assert profile.buffer_min == 10
    assert profile.focus_length_min == 90
    assert profile.working_hours.monday is None
    assert profile.working_hours.tuesday == DayHours(start="10:00", end="14:00")
    assert (await repo.get(test_user_id)).buffer_min == 10


def test_profile_update_rejects_unordered_day():
    with pytest.raises(ValueError):
        ProfileUpdate(working_hours=WorkingHours(monday=DayHours(start="17:00", end="09:00")))


def test_profile_update_rejects_unknown_timezone():
    with pytest.raises(ValueError):
        ProfileUpdate(timezone="Mars/Olympus")


@pytest.mark.asyncio
async def test_habit_crud(session_factory, test_user_id):
    repo = SqliteHabitRepository(session_factory=session_factory)
    late = await repo.create(test_user_id, HabitCreate(name="Read", start_time="21:00", duration_min=30))
    early = await repo.create(
        test_user_id,
        HabitCreate(name="Run", start_time="07:00", duration_min=45, protected=True),
    )

    assert [habit.name for habit in await repo.list(test_user_id)] == ["Run", "Read"]
    assert early.recurrence_rrule == "FREQ=DAILY"

    updated = await repo.update(
        test_user_id, late.id, HabitUpdate(recurrence_rrule="FREQ=WEEKLY;BYDAY=SA,SU")
    )
    assert updated.recurrence_rrule == "FREQ=WEEKLY;BYDAY=SA,SU"
    assert updated.start_time == "21:00"

    assert await repo.delete(test_user_id, late.id) is True
    with pytest.raises(NotFoundError):
        await repo.update(test_user_id, late.id, HabitUpdate(name="Gone"))


@pytest.mark.asyncio
async def test_habit_color(session_factory, test_user_id):
    repo = SqliteHabitRepository(session_factory=session_factory)
    habit = await repo.create(test_user_id, HabitCreate(name="Stretch", start_time="08:00", duration_min=10))

    assert habit.color == DEFAULT_HABIT_COLOR
    recolored = await repo.update(test_user_id, habit.id, HabitUpdate(color="#f59e0b"))
    assert recolored.color == "#f59e0b"

    with pytest.raises(ValueError):
        HabitUpdate(color="orange")
