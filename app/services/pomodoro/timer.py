"""Pomodoro Timer - per-user countdown and focus/break cycling.

The timer owns one ``TimerState`` and is its only writer. Mutations come
from user intents (start/pause/reset/skip/set_current_task) and from the
one-second tick, all on the same event loop. Every mutation is persisted
through the injected state store. Remote session bookkeeping and
notifications run as background tasks so the countdown never waits on I/O.
"""
import asyncio
import logging
from datetime import date
from typing import Callable, Coroutine, Optional, Set

from app.models.pomodoro import (
    LONG_BREAK_INTERVAL,
    SessionType,
    nominal_duration,
    nominal_minutes,
)
from app.models.timer_state import TimerSnapshot, TimerState

from .notifier import BREAK_DONE_BODY, FOCUS_DONE_BODY, NOTIFICATION_TITLE, Notifier
from .session_recorder import SessionRecorder
from .state_store import StateStore

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 1.0


def format_time(seconds: int) -> str:
    """Render seconds as MM:SS"""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def next_phase(phase: SessionType, completed_focus_count: int) -> SessionType:
    """
    Phase that follows a completed one.

    ``completed_focus_count`` must already include the session that just
    finished, so every 4th focus completion leads to a long break.
    """
    if phase == SessionType.FOCUS:
        if completed_focus_count % LONG_BREAK_INTERVAL == 0:
            return SessionType.LONG_BREAK
        return SessionType.SHORT_BREAK
    return SessionType.FOCUS


class PomodoroTimer:
    """Timer/session state machine for a single user"""

    def __init__(
        self,
        *,
        user_id: Optional[str],
        store: StateStore,
        recorder: Optional[SessionRecorder] = None,
        notifier: Optional[Notifier] = None,
        tick_interval: Optional[float] = DEFAULT_TICK_INTERVAL,
        daily_reset: bool = True,
        today: Callable[[], date] = date.today,
    ):
        self.user_id = user_id
        self._store = store
        self._recorder = recorder
        self._notifier = notifier
        self._tick_interval = tick_interval
        self._daily_reset = daily_reset
        self._today = today

        self._starting = False
        self._ticker: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

        self._state = self._restore()

    def _restore(self) -> TimerState:
        state = self._store.load()
        if state is None:
            state = TimerState()
        else:
            logger.info(
                f"Restored timer for user {self.user_id}: phase={state.phase.value} "
                f"remaining={state.remaining_seconds}s"
            )
        # A reload always resumes paused
        state.running = False
        self._roll_day(state)
        return state

    @property
    def state(self) -> TimerState:
        """Copy of the current state"""
        return self._state.model_copy()

    @property
    def running(self) -> bool:
        return self._state.running

    def snapshot(self) -> TimerSnapshot:
        state = self._state
        nominal = nominal_duration(state.phase)
        return TimerSnapshot(
            remaining_seconds=state.remaining_seconds,
            running=state.running,
            phase=state.phase,
            completed_focus_count=self._focus_count_today(state),
            selected_task_id=state.selected_task_id,
            active_session_id=state.active_session_id,
            nominal_seconds=nominal,
            progress_percent=(nominal - state.remaining_seconds) / nominal * 100,
            display_time=format_time(state.remaining_seconds),
        )

    # User intents

    async def start(self, task_id: Optional[str] = None) -> bool:
        """
        Open a session record for the current phase and start counting down.

        Returns False (and does nothing) when already running or when another
        start is still waiting on the recorder.
        """
        if self._state.running or self._starting:
            return False

        self._starting = True
        try:
            resolved_task_id = task_id or self._state.selected_task_id
            session_id = None
            if self._recorder is not None:
                session_id = await self._recorder.open(self.user_id, resolved_task_id, self._state.phase)
        finally:
            self._starting = False

        self._state.running = True
        self._state.active_session_id = session_id
        if task_id:
            self._state.selected_task_id = task_id
        logger.info(
            f"Timer started for user {self.user_id}: phase={self._state.phase.value} "
            f"remaining={self._state.remaining_seconds}s session={session_id}"
        )
        self._commit()
        return True

    def pause(self) -> None:
        # The open session record stays as it is; the next start opens another
        self._state.running = False
        self._commit()

    def reset(self) -> None:
        """Restore the phase's full duration and abandon the open session"""
        self._state.remaining_seconds = nominal_duration(self._state.phase)
        self._state.running = False
        self._state.active_session_id = None
        self._commit()

    def skip(self) -> None:
        """Jump to zero; a running timer completes through the normal path"""
        self._state.remaining_seconds = 0
        self._commit()

    def set_current_task(self, task_id: Optional[str]) -> None:
        self._state.selected_task_id = task_id
        self._commit()

    def tick(self) -> None:
        """Advance the countdown by one second"""
        if not self._state.running or self._state.remaining_seconds <= 0:
            return
        self._state.remaining_seconds -= 1
        self._commit()

    # Lifecycle

    async def drain(self) -> None:
        """Wait for outstanding recorder and notifier work"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Stop ticking and flush background work; the state stays persisted"""
        self._stop_ticker()
        await self.drain()
        await self._store.flush()

    # Internals

    def _commit(self) -> None:
        if self._state.running and self._state.remaining_seconds == 0:
            self._complete()
        self._store.save(self._state)
        self._sync_ticker()

    def _complete(self) -> None:
        state = self._state
        finished = state.phase

        if state.active_session_id and self._recorder is not None:
            self._spawn(self._recorder.finalize(state.active_session_id, nominal_minutes(finished)))

        if finished == SessionType.FOCUS:
            self._roll_day(state)
            state.completed_focus_count += 1
            state.count_date = self._today()

        upcoming = next_phase(finished, state.completed_focus_count)
        state.running = False
        state.phase = upcoming
        state.remaining_seconds = nominal_duration(upcoming)
        state.active_session_id = None

        logger.info(
            f"Timer for user {self.user_id} completed {finished.value}, next is {upcoming.value} "
            f"(completed focus sessions: {state.completed_focus_count})"
        )

        if self._notifier is not None:
            body = FOCUS_DONE_BODY if finished == SessionType.FOCUS else BREAK_DONE_BODY
            self._spawn(self._notify(body))

    async def _notify(self, body: str) -> None:
        try:
            await self._notifier.notify(self.user_id, NOTIFICATION_TITLE, body)
        except Exception as e:
            logger.warning(f"Notification for user {self.user_id} failed: {e}")

    def _roll_day(self, state: TimerState) -> None:
        if not self._daily_reset or state.count_date is None:
            return
        if state.count_date != self._today():
            state.completed_focus_count = 0
            state.count_date = None

    def _focus_count_today(self, state: TimerState) -> int:
        if self._daily_reset and state.count_date is not None and state.count_date != self._today():
            return 0
        return state.completed_focus_count

    def _spawn(self, coro: Coroutine) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Driven synchronously without an event loop: nothing can tick, run inline
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _sync_ticker(self) -> None:
        if not self._state.running:
            self._stop_ticker()
            return
        if self._tick_interval is None or self._ticker is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; timer must be ticked externally")
            return
        self._ticker = loop.create_task(self._run_ticker())

    def _stop_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is None or ticker.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # A ticker that triggered completion exits its own loop
        if ticker is not current:
            ticker.cancel()

    async def _run_ticker(self) -> None:
        me = asyncio.current_task()
        while self._state.running and self._ticker is me:
            await asyncio.sleep(self._tick_interval)
            if self._ticker is not me:
                break
            self.tick()
