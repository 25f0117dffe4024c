from pathlib import Path

import pytest

from app.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("TIMER_STATE_DIR", "POMODORO_NOTIFIER", "POMODORO_DAILY_RESET", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.timer_state_dir == Path(".timevault")
    assert settings.notifier == "log"
    assert settings.daily_reset is True
    assert settings.cors_origins == ["*"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TIMER_STATE_DIR", "/var/lib/timevault")
    monkeypatch.setenv("POMODORO_NOTIFIER", " Push ")
    monkeypatch.setenv("POMODORO_DAILY_RESET", "off")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = get_settings()

    assert settings.timer_state_dir == Path("/var/lib/timevault")
    assert settings.notifier == "push"
    assert settings.daily_reset is False
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
