"""Persistent timer state stores.

A store holds one serialized ``TimerState`` under the fixed key
``pomodoro-state``. Loading never raises: missing or unreadable data is
reported as ``None`` and the caller falls back to a fresh state. Saving is
a full overwrite, last write wins, and logs rather than raises on failure.
"""
import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from app.models.timer_state import TimerState

logger = logging.getLogger(__name__)

STATE_KEY = "pomodoro-state"


class StateStore(Protocol):
    def load(self) -> Optional[TimerState]:
        ...

    def save(self, state: TimerState) -> None:
        ...

    async def flush(self) -> None:
        ...


def decode_state(raw: str) -> Optional[TimerState]:
    """Parse a serialized state, treating any decode problem as absence"""
    try:
        return TimerState.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Discarding unreadable timer state: {e.error_count()} error(s)")
        return None


def encode_state(state: TimerState) -> str:
    return state.model_dump_json()


class MemoryStateStore:
    """In-process store keeping the serialized form, for tests and ephemeral hosts"""

    def __init__(self, raw: Optional[str] = None):
        self.raw = raw

    def load(self) -> Optional[TimerState]:
        if self.raw is None:
            return None
        return decode_state(self.raw)

    def save(self, state: TimerState) -> None:
        self.raw = encode_state(state)

    async def flush(self) -> None:
        pass


class JsonFileStateStore:
    """
    Stores the timer state as ``<directory>/pomodoro-state.json``.

    Inside an event loop, saves are handed to a single writer task that
    performs the disk write in a worker thread. Saves arriving while a write
    is in flight are coalesced so only the newest state is written next.
    Without a running loop the write happens inline.
    """

    def __init__(self, directory: Path):
        self.path = Path(directory) / f"{STATE_KEY}.json"
        self._unwritten: Optional[str] = None
        self._queued: Optional[str] = None
        self._writer: Optional[asyncio.Task] = None

    def load(self) -> Optional[TimerState]:
        if self._unwritten is not None:
            return decode_state(self._unwritten)
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read timer state from {self.path}: {e}")
            return None
        return decode_state(raw)

    def save(self, state: TimerState) -> None:
        raw = encode_state(state)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._unwritten = self._queued = None
            self._write(raw)
            return

        self._unwritten = raw
        self._queued = raw
        if self._writer is None or self._writer.done() or self._writer.get_loop() is not loop:
            self._writer = loop.create_task(self._write_queued())

    async def flush(self) -> None:
        """Wait until the newest saved state is on disk"""
        writer = self._writer
        if writer is not None and not writer.done() and writer.get_loop() is asyncio.get_running_loop():
            await writer

    async def _write_queued(self) -> None:
        while self._queued is not None:
            raw, self._queued = self._queued, None
            await asyncio.to_thread(self._write, raw)
        self._unwritten = None

    def _write(self, raw: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{STATE_KEY}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(raw)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to persist timer state to {self.path}: {e}")
