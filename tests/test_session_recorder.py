from datetime import datetime, timezone

from app.models.pomodoro import SessionType
from app.services.pomodoro import SessionRecorder

from conftest import FakeSessionRepository, run


def test_open_creates_incomplete_record_with_planned_minutes(session_repo):
    recorder = SessionRecorder(session_repo)
    before = datetime.now(timezone.utc)

    session_id = run(recorder.open("user-1", "task-7", SessionType.FOCUS))

    assert session_id == "session-1"
    created = session_repo.created[0]
    assert created.user_id == "user-1"
    assert created.task_id == "task-7"
    assert created.session_type == SessionType.FOCUS
    assert created.planned_duration == 25
    assert created.started_at >= before
    assert session_repo.rows[session_id].completed is False


def test_open_wire_format():
    repo = FakeSessionRepository()
    run(SessionRecorder(repo).open("user-1", None, SessionType.LONG_BREAK))

    payload = repo.created[0].model_dump(exclude_unset=True, mode="json")
    assert set(payload) == {"user_id", "task_id", "session_type", "planned_duration", "started_at"}
    assert payload["session_type"] == "long_break"
    assert payload["planned_duration"] == 15
    assert payload["task_id"] is None


def test_open_without_user_records_nothing(session_repo):
    assert run(SessionRecorder(session_repo).open(None, "task-7", SessionType.FOCUS)) is None
    assert session_repo.created == []


def test_open_failure_returns_unavailable(caplog):
    repo = FakeSessionRepository(fail_create=True)
    assert run(SessionRecorder(repo).open("user-1", None, SessionType.FOCUS)) is None
    assert "Error creating session" in caplog.text


def test_finalize_marks_record_complete(session_repo):
    recorder = SessionRecorder(session_repo)
    session_id = run(recorder.open("user-1", None, SessionType.SHORT_BREAK))

    assert run(recorder.finalize(session_id, 5)) is True

    row = session_repo.rows[session_id]
    assert row.completed is True
    assert row.actual_duration == 5
    assert row.ended_at is not None
    update = session_repo.updates[0][1].model_dump(exclude_unset=True)
    assert set(update) == {"actual_duration", "ended_at", "completed"}


def test_finalize_unknown_or_failing_is_swallowed(caplog):
    repo = FakeSessionRepository()
    assert run(SessionRecorder(repo).finalize("missing", 25)) is False

    repo.fail_update = True
    assert run(SessionRecorder(repo).finalize("session-1", 25)) is False
    assert "Error completing session session-1" in caplog.text
