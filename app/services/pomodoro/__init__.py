"""Pomodoro timer core: state machine, persistence, session recording"""
from .notifier import LogNotifier, Notifier, PushNotifier
from .registry import TimerRegistry
from .session_recorder import SessionRecorder
from .state_store import JsonFileStateStore, MemoryStateStore, StateStore
from .timer import PomodoroTimer, format_time, next_phase

__all__ = [
    "LogNotifier",
    "Notifier",
    "PushNotifier",
    "TimerRegistry",
    "SessionRecorder",
    "JsonFileStateStore",
    "MemoryStateStore",
    "StateStore",
    "PomodoroTimer",
    "format_time",
    "next_phase",
]
