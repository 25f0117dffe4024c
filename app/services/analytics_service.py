"""
Analytics Service

Aggregates completed pomodoro sessions into the dashboard report:
headline stats, a daily focus series, and splits by session type and task.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from app.infra.supabase.repositories.pomodoro_sessions import PomodoroSessionRepository
from app.infra.supabase.repositories.tasks import TaskRepository
from app.models.analytics import (
    AnalyticsReport,
    DailyFocus,
    SessionStats,
    SessionTypeShare,
    TaskFocus,
    TimeFrame,
)
from app.models.pomodoro import SessionType
from app.models.pomodoro_session import CompletedSession

logger = logging.getLogger(__name__)

TIME_FRAME_DAYS = {
    TimeFrame.WEEK: 7,
    TimeFrame.MONTH: 30,
}

RECENT_SESSION_LIMIT = 10


def _local_date(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()


def week_bounds(today: date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing ``today``"""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def calculate_stats(sessions: List[CompletedSession], completed_tasks: int, today: date) -> SessionStats:
    focus_sessions = [s for s in sessions if s.session_type == SessionType.FOCUS]
    total_focus_time = sum(s.actual_duration or 0 for s in focus_sessions)
    week_start, week_end = week_bounds(today)

    return SessionStats(
        total_sessions=len(focus_sessions),
        total_focus_time=total_focus_time,
        completed_tasks=completed_tasks,
        average_session_length=total_focus_time / len(focus_sessions) if focus_sessions else 0,
        today_sessions=sum(1 for s in sessions if _local_date(s.started_at) == today),
        this_week_sessions=sum(1 for s in sessions if week_start <= _local_date(s.started_at) <= week_end),
    )


def daily_focus(sessions: List[CompletedSession], time_frame: TimeFrame, today: date) -> List[DailyFocus]:
    """One entry per day of the time frame, oldest first, counting focus sessions only"""
    by_day: Dict[date, List[CompletedSession]] = defaultdict(list)
    for session in sessions:
        if session.session_type == SessionType.FOCUS:
            by_day[_local_date(session.started_at)].append(session)

    label_format = "%a" if time_frame == TimeFrame.WEEK else "%b %d"
    days = TIME_FRAME_DAYS[time_frame]
    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_sessions = by_day.get(day, [])
        series.append(
            DailyFocus(
                date=day.isoformat(),
                label=day.strftime(label_format),
                sessions=len(day_sessions),
                minutes=sum(s.actual_duration or 0 for s in day_sessions),
            )
        )
    return series


def by_session_type(sessions: List[CompletedSession]) -> List[SessionTypeShare]:
    shares = []
    for session_type in SessionType:
        matching = [s for s in sessions if s.session_type == session_type]
        if matching:
            shares.append(
                SessionTypeShare(
                    session_type=session_type.value,
                    sessions=len(matching),
                    minutes=sum(s.actual_duration or 0 for s in matching),
                )
            )
    return shares


def by_task(sessions: List[CompletedSession]) -> List[TaskFocus]:
    """Focus time per task title, largest first"""
    totals: Dict[str, TaskFocus] = {}
    for session in sessions:
        if session.session_type != SessionType.FOCUS:
            continue
        entry = totals.setdefault(
            session.task_title, TaskFocus(task_title=session.task_title, sessions=0, minutes=0)
        )
        entry.sessions += 1
        entry.minutes += session.actual_duration or 0
    return sorted(totals.values(), key=lambda t: t.minutes, reverse=True)


class AnalyticsService:
    """Builds analytics reports for a user"""

    def __init__(
        self,
        session_repo: PomodoroSessionRepository,
        task_repo: TaskRepository,
        today: Optional[Callable[[], date]] = None,
    ):
        self.session_repo = session_repo
        self.task_repo = task_repo
        self._today = today or date.today

    async def get_completed_sessions(self, user_id: str) -> List[CompletedSession]:
        return await self.session_repo.find_completed_by_user(user_id)

    async def build_report(self, user_id: str, time_frame: TimeFrame = TimeFrame.WEEK) -> AnalyticsReport:
        sessions = await self.session_repo.find_completed_by_user(user_id)
        completed_tasks = await self.task_repo.count_completed_by_user(user_id)
        today = self._today()

        logger.info(f"Building {time_frame.value} analytics for user {user_id} from {len(sessions)} sessions")

        return AnalyticsReport(
            time_frame=time_frame,
            stats=calculate_stats(sessions, completed_tasks, today),
            daily=daily_focus(sessions, time_frame, today),
            by_session_type=by_session_type(sessions),
            by_task=by_task(sessions),
            recent_sessions=sessions[:RECENT_SESSION_LIMIT],
        )
