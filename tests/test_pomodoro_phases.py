import pytest

from app.models.pomodoro import SessionType, nominal_duration, nominal_minutes
from app.services.pomodoro import format_time, next_phase


@pytest.mark.parametrize(
    "session_type, seconds",
    [
        (SessionType.FOCUS, 1500),
        (SessionType.SHORT_BREAK, 300),
        (SessionType.LONG_BREAK, 900),
    ],
)
def test_nominal_durations(session_type, seconds):
    assert nominal_duration(session_type) == seconds
    assert nominal_minutes(session_type) == seconds / 60


def test_session_type_values_match_stored_strings():
    assert [t.value for t in SessionType] == ["focus", "short_break", "long_break"]
    assert nominal_duration("long_break") == 900


def test_every_fourth_focus_is_followed_by_long_break():
    routes = [next_phase(SessionType.FOCUS, count) for count in range(1, 13)]
    long_breaks = [i + 1 for i, phase in enumerate(routes) if phase == SessionType.LONG_BREAK]
    assert long_breaks == [4, 8, 12]
    assert routes.count(SessionType.SHORT_BREAK) == 9


@pytest.mark.parametrize("phase", [SessionType.SHORT_BREAK, SessionType.LONG_BREAK])
def test_breaks_always_return_to_focus(phase):
    for count in range(0, 9):
        assert next_phase(phase, count) == SessionType.FOCUS


def test_format_time():
    assert format_time(1500) == "25:00"
    assert format_time(299) == "04:59"
    assert format_time(0) == "00:00"
