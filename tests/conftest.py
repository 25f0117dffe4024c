import asyncio
import itertools
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

import pytest

from app.models.pomodoro_session import PomodoroSession, PomodoroSessionCreate, PomodoroSessionUpdate
from app.services.pomodoro import MemoryStateStore, PomodoroTimer, SessionRecorder

TODAY = date(2026, 3, 2)


class FakeSessionRepository:
    """Records create/update calls in place of the pomodoro_sessions table"""

    def __init__(self, fail_create: bool = False, fail_update: bool = False, delay: float = 0):
        self.fail_create = fail_create
        self.delay = delay
        self.fail_update = fail_update
        self.rows: Dict[str, PomodoroSession] = {}
        self.created: List[PomodoroSessionCreate] = []
        self.updates: List[tuple] = []
        self._ids = itertools.count(1)

    async def create(self, data: PomodoroSessionCreate) -> PomodoroSession:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_create:
            raise ConnectionError("supabase unreachable")
        self.created.append(data)
        session = PomodoroSession(id=f"session-{next(self._ids)}", **data.model_dump())
        self.rows[session.id] = session
        return session

    async def update(self, id: str, data: PomodoroSessionUpdate) -> Optional[PomodoroSession]:
        if self.fail_update:
            raise ConnectionError("supabase unreachable")
        self.updates.append((id, data))
        row = self.rows.get(id)
        if row is None:
            return None
        updated = row.model_copy(update=data.model_dump(exclude_unset=True))
        self.rows[id] = updated
        return updated


class FakeNotifier:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[tuple] = []

    async def notify(self, user_id, title, body):
        if self.fail:
            raise RuntimeError("notifications blocked")
        self.sent.append((user_id, title, body))


@pytest.fixture
def session_repo() -> FakeSessionRepository:
    return FakeSessionRepository()


@pytest.fixture
def store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def make_timer(session_repo, store, notifier):
    """Build a timer that is ticked by hand"""
    def factory(**overrides) -> PomodoroTimer:
        kwargs = dict(
            user_id="user-1",
            store=store,
            recorder=SessionRecorder(session_repo),
            notifier=notifier,
            tick_interval=None,
            today=lambda: TODAY,
        )
        kwargs.update(overrides)
        return PomodoroTimer(**kwargs)

    return factory


def run(coro):
    return asyncio.run(coro)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)
