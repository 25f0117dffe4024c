"""Pomodoro phase model and nominal durations"""
from enum import Enum


class SessionType(str, Enum):
    """Countdown phase kinds, valued as stored in pomodoro_sessions.session_type"""
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


FOCUS_SECONDS = 25 * 60
SHORT_BREAK_SECONDS = 5 * 60
LONG_BREAK_SECONDS = 15 * 60

# A long break follows every Nth completed focus session
LONG_BREAK_INTERVAL = 4

NOMINAL_DURATIONS = {
    SessionType.FOCUS: FOCUS_SECONDS,
    SessionType.SHORT_BREAK: SHORT_BREAK_SECONDS,
    SessionType.LONG_BREAK: LONG_BREAK_SECONDS,
}


def nominal_duration(session_type: SessionType) -> int:
    """Planned length of a phase in seconds"""
    return NOMINAL_DURATIONS[SessionType(session_type)]


def nominal_minutes(session_type: SessionType) -> float:
    """Planned length of a phase in minutes, as stored in planned/actual_duration"""
    return nominal_duration(session_type) / 60
