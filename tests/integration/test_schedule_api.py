"""
Integration tests for the planning API.

Runs the FastAPI app against a temporary SQLite database.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from weekplan.api.deps import (
    get_event_repository,
    get_habit_repository,
    get_profile_repository,
    get_project_repository,
    get_schedule_block_repository,
    get_task_repository,
)
from weekplan.infrastructure.local.event_repository import SqliteCalendarEventRepository
from weekplan.infrastructure.local.habit_repository import SqliteHabitRepository
from weekplan.infrastructure.local.profile_repository import SqliteProfileRepository
from weekplan.infrastructure.local.project_repository import SqliteProjectRepository
from weekplan.infrastructure.local.schedule_block_repository import SqliteScheduleBlockRepository
from weekplan.infrastructure.local.task_repository import SqliteTaskRepository
from weekplan.utils.datetime_utils import day_bounds, get_zone, now_utc, start_of_week


@pytest.fixture
async def client(session_factory):
    """HTTP client with repositories bound to the test database."""
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_task_repository] = lambda: SqliteTaskRepository(session_factory)
    app.dependency_overrides[get_habit_repository] = lambda: SqliteHabitRepository(session_factory)
    app.dependency_overrides[get_event_repository] = lambda: SqliteCalendarEventRepository(session_factory)
    app.dependency_overrides[get_profile_repository] = lambda: SqliteProfileRepository(session_factory)
    app.dependency_overrides[get_project_repository] = lambda: SqliteProjectRepository(session_factory)
    app.dependency_overrides[get_schedule_block_repository] = (
        lambda: SqliteScheduleBlockRepository(session_factory)
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


def _week_start():
    return start_of_week(now_utc(), get_zone("UTC"))


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_plan_requires_profile(client):
    await client.post("/api/tasks", json={"title": "Orphan"})

    response = await client.post("/api/schedule/plan")

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_plan_rejects_profile_without_working_days(client):
    empty_week = {day: None for day in (
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
    )}
    await client.patch("/api/profile", json={"working_hours": empty_week})

    response = await client.post("/api/schedule/plan")

    assert response.status_code == 409
    assert (await client.get("/api/schedule/blocks")).json() == []


@pytest.mark.asyncio
async def test_full_planning_flow(client):
    profile = (await client.get("/api/profile")).json()
    assert profile["timezone"] == "UTC"
    assert profile["focus_length_min"] == 90

    report = (await client.post(
        "/api/tasks",
        json={"title": "Quarterly report", "priority": "p1", "est_min": 120, "min_chunk_min": 30},
    )).json()
    chores = (await client.post(
        "/api/tasks",
        json={"title": "Inbox zero", "priority": "p4", "est_min": 30},
    )).json()
    habit = (await client.post(
        "/api/habits",
        json={"name": "Stretch", "start_time": "08:00", "duration_min": 15, "protected": True},
    )).json()

    response = await client.post("/api/schedule/plan")
    assert response.status_code == 200
    run = response.json()
    assert run["week_start"] == _week_start().isoformat()
    assert set(run["scheduled_task_ids"]) == {report["id"], chores["id"]}
    # 7 habit blocks, 2 chunks for the report, 1 for the chores
    assert run["blocks_created"] == 10

    blocks = (await client.get("/api/schedule/blocks")).json()
    assert len(blocks) == 10
    report_blocks = [b for b in blocks if b["ref_id"] == report["id"]]
    assert [b["explanation"] for b in report_blocks] == ["Priority: P1", "Priority: P1"]
    habit_blocks = [b for b in blocks if b["ref_id"] == habit["id"]]
    assert len(habit_blocks) == 7
    assert habit_blocks[0]["explanation"] == "Protected recurring habit - scheduled at fixed time"

    task = (await client.get(f"/api/tasks/{report['id']}")).json()
    assert task["status"] == "scheduled"

    # Replanning yields the same schedule.
    rerun = (await client.post("/api/schedule/plan")).json()
    assert rerun["blocks_created"] == 10
    replanned = (await client.get("/api/schedule/blocks")).json()
    assert [(b["start_ts"], b["end_ts"]) for b in replanned] == [
        (b["start_ts"], b["end_ts"]) for b in blocks
    ]

    completed = await client.post(f"/api/tasks/{report['id']}/complete")
    assert completed.json()["status"] == "done"

    stats = (await client.get("/api/schedule/stats")).json()
    assert stats["blocks_by_status"]["completed"] == 2
    assert stats["completed_focus_hours"] == 2.0
    assert stats["tasks_by_status"] == {"done": 1, "scheduled": 1}
    assert stats["total_habits"] == 1


@pytest.mark.asyncio
async def test_event_sync_blocks_planning(client):
    await client.get("/api/profile")
    week_start = _week_start()
    day_start, _ = day_bounds(week_start, get_zone("UTC"))
    offsite = {
        "title": "Offsite",
        "start_ts": (day_start + timedelta(hours=8)).isoformat(),
        "end_ts": (day_start + timedelta(hours=18)).isoformat(),
        "external_id": "evt-1",
    }

    sync = await client.put("/api/events/sync/google", json=[offsite])
    assert sync.status_code == 200
    assert sync.json() == {"source": "google", "removed": 0, "created": 1}

    await client.post("/api/tasks", json={"title": "Deep work", "est_min": 60})
    await client.post("/api/schedule/plan")

    blocks = (await client.get("/api/schedule/blocks")).json()
    assert len(blocks) == 1
    assert blocks[0]["start_ts"].startswith((week_start + timedelta(days=1)).isoformat())

    resync = await client.put("/api/events/sync/google", json=[])
    assert resync.json()["removed"] == 1
    assert (await client.get("/api/events")).json() == []


@pytest.mark.asyncio
async def test_block_status_and_not_found(client):
    await client.get("/api/profile")
    await client.post("/api/tasks", json={"title": "Review", "est_min": 30})
    await client.post("/api/schedule/plan")
    [block] = (await client.get("/api/schedule/blocks")).json()

    patched = await client.patch(f"/api/schedule/blocks/{block['id']}", json={"status": "completed"})
    assert patched.json()["status"] == "completed"

    assert (await client.delete(f"/api/schedule/blocks/{block['id']}")).status_code == 204
    assert (await client.delete(f"/api/schedule/blocks/{block['id']}")).status_code == 404
    assert (await client.get(f"/api/tasks/{uuid4()}")).status_code == 404
    assert (await client.patch(f"/api/habits/{uuid4()}", json={"name": "x"})).status_code == 404


@pytest.mark.asyncio
async def test_task_validation(client):
    response = await client.post(
        "/api/tasks", json={"title": "Odd", "est_min": 10, "min_chunk_min": 15}
    )
    assert response.status_code == 422

    created = (await client.post("/api/tasks", json={"title": "Fine", "est_min": 30})).json()
    response = await client.patch(f"/api/tasks/{created['id']}", json={"min_chunk_min": 60})
    assert response.status_code == 422

    reopened = await client.post(f"/api/tasks/{created['id']}/reopen")
    assert reopened.json()["status"] == "backlog"


@pytest.mark.asyncio
async def test_projects_group_tasks(client):
    project = (await client.post("/api/projects", json={"name": "Launch", "color": "#10b981"})).json()
    assert project["color"] == "#10b981"

    tagged = (await client.post(
        "/api/tasks", json={"title": "Press kit", "project_id": project["id"]}
    )).json()
    await client.post("/api/tasks", json={"title": "Unrelated"})
    assert tagged["project_id"] == project["id"]

    in_project = (await client.get(f"/api/projects/{project['id']}/tasks")).json()
    assert [task["title"] for task in in_project] == ["Press kit"]
    filtered = (await client.get("/api/tasks", params={"project_id": project["id"]})).json()
    assert [task["id"] for task in filtered] == [tagged["id"]]

    [listed] = (await client.get("/api/projects")).json()
    assert (listed["total_tasks"], listed["completed_tasks"]) == (1, 0)

    unknown = await client.post("/api/tasks", json={"title": "Orphan", "project_id": str(uuid4())})
    assert unknown.status_code == 422
    assert (await client.post("/api/projects", json={"name": "Bad", "color": "red"})).status_code == 422

    assert (await client.delete(f"/api/projects/{project['id']}")).status_code == 204
    assert (await client.get(f"/api/projects/{project['id']}")).status_code == 404
    assert (await client.get(f"/api/tasks/{tagged['id']}")).json()["project_id"] is None
