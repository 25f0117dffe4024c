"""Timer registry - one PomodoroTimer per authenticated user"""
import asyncio
import logging
import re
import threading
from pathlib import Path
from typing import Callable, Dict, Optional

from .notifier import Notifier
from .session_recorder import SessionRecorder
from .state_store import JsonFileStateStore, StateStore
from .timer import DEFAULT_TICK_INTERVAL, PomodoroTimer

logger = logging.getLogger(__name__)

_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class TimerRegistry:
    """Owns the live timers of this process, keyed by user id"""

    def __init__(
        self,
        *,
        store_factory: Callable[[str], StateStore],
        recorder: Optional[SessionRecorder] = None,
        notifier: Optional[Notifier] = None,
        tick_interval: Optional[float] = DEFAULT_TICK_INTERVAL,
        daily_reset: bool = True,
    ):
        self._store_factory = store_factory
        self._recorder = recorder
        self._notifier = notifier
        self._tick_interval = tick_interval
        self._daily_reset = daily_reset
        self._timers: Dict[str, PomodoroTimer] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_state_dir(cls, state_dir: Path, **kwargs) -> "TimerRegistry":
        """Registry persisting each user's state under ``state_dir/<user_id>/``"""
        def store_factory(user_id: str) -> StateStore:
            return JsonFileStateStore(Path(state_dir) / _UNSAFE_PATH_CHARS.sub("_", user_id))

        return cls(store_factory=store_factory, **kwargs)

    def get(self, user_id: str) -> PomodoroTimer:
        """Return the user's timer, restoring it from its store on first use"""
        with self._lock:
            timer = self._timers.get(user_id)
            if timer is None:
                timer = PomodoroTimer(
                    user_id=user_id,
                    store=self._store_factory(user_id),
                    recorder=self._recorder,
                    notifier=self._notifier,
                    tick_interval=self._tick_interval,
                    daily_reset=self._daily_reset,
                )
                self._timers[user_id] = timer
                logger.info(f"Timer created for user {user_id}")
        return timer

    async def discard(self, user_id: str) -> None:
        """Drop a user's timer (sign-out); persisted state is kept"""
        with self._lock:
            timer = self._timers.pop(user_id, None)
        if timer is not None:
            await timer.close()

    async def close_all(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        await asyncio.gather(*(timer.close() for timer in timers), return_exceptions=True)
        logger.info(f"Closed {len(timers)} timer(s)")

    def __len__(self) -> int:
        return len(self._timers)
