from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from .calculator import SECONDS_PER_HOUR
from .exceptions import SessionNotActiveError, SessionNotFoundError
from .models import OvertimeSession, PayCalculation, SessionState


def advance_session(session: OvertimeSession, now: datetime) -> bool:
    """Bring an active session's live figures up to ``now``.

    Returns True only on the call that completes a fixed-duration session.
    Inactive sessions are left untouched.
    """
    if not session.is_active:
        return False

    elapsed = (now - session.start_time).total_seconds()
    session.elapsed_time = elapsed

    max_seconds = session.max_seconds
    if max_seconds is None:
        session.current_earnings = session.calculation.rate_per_second * elapsed
        session.remaining_time = None
        return False

    if elapsed < max_seconds:
        session.current_earnings = session.calculation.rate_per_second * elapsed
        session.remaining_time = max_seconds - elapsed
        return False

    session.is_active = False
    session.end_time = now
    session.duration = elapsed
    session.current_earnings = session.calculation.total_pay
    session.remaining_time = 0
    session.committed_hours = session.total_hours
    session.state = SessionState.COMPLETED_NATURALLY
    session.completion_pending = True
    return True


def finish_session(session: OvertimeSession, now: datetime) -> float:
    """Manually end an active session and return the hours it commits."""
    if not session.is_active:
        raise SessionNotActiveError(session.id)

    elapsed = (now - session.start_time).total_seconds()
    session.is_active = False
    session.end_time = now
    session.duration = elapsed
    session.elapsed_time = elapsed
    session.current_earnings = session.calculation.rate_per_second * elapsed
    if session.is_open_ended:
        session.committed_hours = elapsed / SECONDS_PER_HOUR
    else:
        session.remaining_time = max(session.max_seconds - elapsed, 0)
        session.committed_hours = session.total_hours
    session.state = SessionState.STOPPED_MANUALLY
    return session.committed_hours


class SessionStore:
    """In-memory registry of overtime sessions keyed by creation-ordered id."""

    def __init__(self) -> None:
        self._sessions: Dict[str, OvertimeSession] = {}
        self._last_id: Optional[int] = None

    def _next_id(self, now: datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        if self._last_id is not None and candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    def create(
        self,
        *,
        hourly_rate: float,
        overtime_type: str,
        total_hours: Optional[float],
        calculation: PayCalculation,
        start_time: datetime,
        warnings: List[str],
    ) -> OvertimeSession:
        session = OvertimeSession(
            id=self._next_id(start_time),
            hourly_rate=hourly_rate,
            overtime_type=overtime_type,
            total_hours=total_hours,
            calculation=calculation,
            start_time=start_time,
            warnings=list(warnings),
        )
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> OvertimeSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def find(self, session_id: str) -> Optional[OvertimeSession]:
        return self._sessions.get(session_id)

    def active(self) -> List[OvertimeSession]:
        return [s for s in self._sessions.values() if s.is_active]

    def pending_completions(self) -> List[OvertimeSession]:
        return [s for s in self._sessions.values() if s.completion_pending]

    def __iter__(self) -> Iterator[OvertimeSession]:
        return iter(list(self._sessions.values()))

    def __len__(self) -> int:
        return len(self._sessions)
