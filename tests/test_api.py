import asyncio
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_feedback_service, get_task_service, get_timer_registry
from app.main import app
from app.middleware.auth import get_current_user_id
from app.models.feedback import Feedback, FeedbackCreate
from app.models.task import Task, TaskCreate, TaskUpdate
from app.services.feedback_service import FeedbackService
from app.services.pomodoro import MemoryStateStore, SessionRecorder, TimerRegistry
from app.services.task_service import TaskService

from conftest import FakeSessionRepository


class FakeTaskRepository:
    def __init__(self):
        self.rows: Dict[str, Task] = {}

    async def find_by_user(self, user_id: str) -> List[Task]:
        tasks = [t for t in self.rows.values() if t.user_id == user_id]
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def find_by_id(self, id: str) -> Optional[Task]:
        return self.rows.get(id)

    async def create(self, data: TaskCreate) -> Task:
        now = datetime.now(timezone.utc)
        task = Task(id=f"task-{len(self.rows) + 1}", created_at=now, updated_at=now, **data.model_dump())
        self.rows[task.id] = task
        return task

    async def update(self, id: str, data: TaskUpdate) -> Optional[Task]:
        task = self.rows[id].model_copy(update=data.model_dump(exclude_unset=True))
        self.rows[id] = task
        return task

    async def delete(self, id: str) -> bool:
        return self.rows.pop(id, None) is not None


def add_task(task_repo: FakeTaskRepository, task_id: str, user_id: str = "user-1") -> Task:
    now = datetime.now(timezone.utc)
    task = Task(id=task_id, user_id=user_id, title=f"Task {task_id}", created_at=now, updated_at=now)
    task_repo.rows[task_id] = task
    return task


@pytest.fixture
def session_repo():
    return FakeSessionRepository()


@pytest.fixture
def task_repo():
    return FakeTaskRepository()


@pytest.fixture
def client(session_repo, task_repo):
    registry = TimerRegistry(
        store_factory=lambda user_id: MemoryStateStore(),
        recorder=SessionRecorder(session_repo),
        tick_interval=None,
    )
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    app.dependency_overrides[get_timer_registry] = lambda: registry
    app.dependency_overrides[get_task_service] = lambda: TaskService(task_repo)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_requires_authorization_header():
    response = TestClient(app).get("/api/timer")
    assert response.status_code == 401


def test_get_timer_snapshot(client):
    body = client.get("/api/timer").json()
    assert body["phase"] == "focus"
    assert body["remaining_seconds"] == 1500
    assert body["display_time"] == "25:00"
    assert body["running"] is False


def test_start_is_idempotent(client, session_repo, task_repo):
    add_task(task_repo, "task-1")
    first = client.post("/api/timer/start", json={"task_id": "task-1"}).json()
    second = client.post("/api/timer/start").json()

    assert first["accepted"] is True
    assert first["timer"]["running"] is True
    assert first["timer"]["selected_task_id"] == "task-1"
    assert second["accepted"] is False
    assert len(session_repo.created) == 1


def test_skip_running_timer_moves_to_break(client, session_repo):
    client.post("/api/timer/start")
    body = client.post("/api/timer/skip").json()

    assert body["timer"]["phase"] == "short_break"
    assert body["timer"]["remaining_seconds"] == 300
    assert body["timer"]["completed_focus_count"] == 1


def test_pause_and_reset(client):
    client.post("/api/timer/start")
    paused = client.post("/api/timer/pause").json()["timer"]
    assert paused["running"] is False
    assert paused["active_session_id"] == "session-1"

    reset = client.post("/api/timer/reset").json()["timer"]
    assert reset["remaining_seconds"] == 1500
    assert reset["active_session_id"] is None


def test_changing_task_while_running_is_rejected(client, task_repo):
    add_task(task_repo, "task-2")
    add_task(task_repo, "task-3")
    assert client.put("/api/timer/task", json={"task_id": "task-2"}).status_code == 200
    client.post("/api/timer/start")

    response = client.put("/api/timer/task", json={"task_id": "task-3"})
    assert response.status_code == 409
    assert client.get("/api/timer").json()["selected_task_id"] == "task-2"


def test_task_crud(client, task_repo):
    created = client.post(
        "/api/tasks", json={"title": "  Write report ", "estimated_pomodoros": 42}
    ).json()["task"]
    assert created["title"] == "Write report"
    assert created["estimated_pomodoros"] == 20
    assert created["completed"] is False

    listing = client.get("/api/tasks").json()
    assert listing["count"] == 1

    updated = client.patch(f"/api/tasks/{created['id']}", json={"estimated_pomodoros": 0}).json()["task"]
    assert updated["estimated_pomodoros"] == 1

    toggled = client.post(f"/api/tasks/{created['id']}/toggle").json()["task"]
    assert toggled["completed"] is True

    assert client.delete(f"/api/tasks/{created['id']}").json()["success"] is True
    assert client.delete(f"/api/tasks/{created['id']}").status_code == 404


def test_tasks_of_other_users_are_not_found(client, task_repo):
    add_task(task_repo, "task-x", user_id="someone-else")

    assert client.post("/api/tasks/task-x/toggle").status_code == 404
    assert client.get("/api/tasks").json()["count"] == 0


def test_blank_task_title_is_rejected(client):
    assert client.post("/api/tasks", json={"title": "   "}).status_code == 422


class FakeFeedbackRepository:
    def __init__(self):
        self.rows: List[Feedback] = []

    async def create(self, data: FeedbackCreate) -> Feedback:
        feedback = Feedback(id=f"feedback-{len(self.rows) + 1}", **data.model_dump())
        self.rows.append(feedback)
        return feedback


def test_submit_feedback(client):
    feedback_repo = FakeFeedbackRepository()
    app.dependency_overrides[get_feedback_service] = lambda: FeedbackService(feedback_repo)

    response = client.post(
        "/api/feedback",
        json={"type": "bug", "subject": " Timer froze ", "message": "After skip", "rating": 2},
    )

    assert response.status_code == 201
    assert response.json()["subject"] == "Timer froze"
    assert feedback_repo.rows[0].user_id == "user-1"
    assert client.post("/api/feedback", json={"subject": "x", "message": "y", "rating": 9}).status_code == 422


def test_starting_with_another_users_task_is_rejected(client, session_repo, task_repo):
    add_task(task_repo, "task-x", user_id="someone-else")

    assert client.post("/api/timer/start", json={"task_id": "task-x"}).status_code == 404
    assert client.put("/api/timer/task", json={"task_id": "task-x"}).status_code == 404
    assert client.put("/api/timer/task", json={"task_id": "missing"}).status_code == 404

    snapshot = client.get("/api/timer").json()
    assert snapshot["running"] is False
    assert snapshot["selected_task_id"] is None
    assert session_repo.created == []


def test_concurrent_first_requests_share_one_timer(task_repo):
    session_repo = FakeSessionRepository(delay=0.05)
    stores_built = []

    def slow_store_factory(user_id):
        # Blocks like a disk read of the persisted state
        time.sleep(0.05)
        stores_built.append(user_id)
        return MemoryStateStore()

    registry = TimerRegistry(
        store_factory=slow_store_factory,
        recorder=SessionRecorder(session_repo),
        tick_interval=None,
    )
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    app.dependency_overrides[get_timer_registry] = lambda: registry
    app.dependency_overrides[get_task_service] = lambda: TaskService(task_repo)

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            snapshots = await asyncio.gather(*(http.get("/api/timer") for _ in range(4)))
            starts = await asyncio.gather(*(http.post("/api/timer/start") for _ in range(2)))
        return snapshots, starts

    try:
        snapshots, starts = asyncio.run(scenario())
    finally:
        app.dependency_overrides.clear()

    assert all(r.status_code == 200 for r in snapshots)
    assert stores_built == ["user-1"]
    assert len(registry) == 1
    assert sorted(r.json()["accepted"] for r in starts) == [False, True]
    assert len(session_repo.created) == 1
