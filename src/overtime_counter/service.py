"""Request-level operations of the overtime counter.

Every public method is synchronous and never awaits, so when it runs on the
event loop it is atomic with respect to the tick scheduler and other requests.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .calculator import compute_pay, hourly_rate_from_salary
from .clock import Clock, SystemClock
from .core.logging import get_logger
from .core.observability import get_meter
from .exceptions import ValidationError
from .limits import OVERTIME_LIMITS, OvertimeLimits, validate_overtime_hours
from .models import OvertimeSession, OvertimeTracking, PayCalculation
from .notifications import NotificationHub
from .sessions import SessionStore, advance_session, finish_session
from .tracking import DEFAULT_USER_ID, OvertimeTracker

logger = get_logger(__name__)
meter = get_meter()
sessions_started = meter.create_counter("overtime.sessions.started", description="Sessions started")
sessions_ended = meter.create_counter("overtime.sessions.ended", description="Sessions stopped or completed")


@dataclass
class CalculationOutcome:
    calculation: PayCalculation
    warnings: List[str] = field(default_factory=list)
    is_preview: bool = False


def _require_positive(value: Optional[float], message: str) -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        raise ValidationError(message)
    return value


def _check_request(hourly_rate: Optional[float], overtime_type: Optional[str]) -> None:
    if not hourly_rate or not overtime_type or not str(overtime_type).strip():
        raise ValidationError("Hourly rate and overtime type are required")
    if not math.isfinite(hourly_rate) or hourly_rate <= 0:
        raise ValidationError("Invalid hourly rate")


class OvertimeService:
    def __init__(
        self,
        store: SessionStore | None = None,
        tracker: OvertimeTracker | None = None,
        clock: Clock | None = None,
        notifications: NotificationHub | None = None,
        limits: OvertimeLimits = OVERTIME_LIMITS,
        user_id: str = DEFAULT_USER_ID,
    ) -> None:
        self.store = store or SessionStore()
        self.tracker = tracker or OvertimeTracker()
        self.clock = clock or SystemClock()
        self.notifications = notifications or NotificationHub()
        self.limits = limits
        self.user_id = user_id

    def _validated(self, hourly_rate: float, overtime_type: str, hours: Optional[float]) -> CalculationOutcome:
        if hours is not None and (not math.isfinite(hours) or hours <= 0):
            raise ValidationError("Overtime hours must be greater than 0")
        hours_to_use = hours if hours is not None else 1
        validation = validate_overtime_hours(
            hours_to_use, overtime_type, self.tracker.get_tracking(self.user_id), self.limits
        )
        if not validation.is_valid:
            raise ValidationError(", ".join(validation.errors))
        return CalculationOutcome(
            calculation=compute_pay(hourly_rate, overtime_type, hours_to_use),
            warnings=validation.warnings,
            is_preview=hours is None,
        )

    def calculate(self, hourly_rate: Optional[float], overtime_type: Optional[str], hours: Optional[float] = None) -> CalculationOutcome:
        _check_request(hourly_rate, overtime_type)
        return self._validated(hourly_rate, overtime_type, hours)

    def calculate_from_salary(
        self,
        salary: Optional[float],
        daily_hours: Optional[float],
        overtime_type: Optional[str],
        hours: Optional[float] = None,
    ) -> CalculationOutcome:
        if not overtime_type or not str(overtime_type).strip():
            raise ValidationError("Overtime type is required")
        salary = _require_positive(salary, "Salary must be greater than 0")
        daily_hours = _require_positive(daily_hours, "Daily working hours must be greater than 0")
        return self._validated(hourly_rate_from_salary(salary, daily_hours), overtime_type, hours)

    def start_session(self, hourly_rate: Optional[float], overtime_type: Optional[str], hours: Optional[float] = None) -> OvertimeSession:
        _check_request(hourly_rate, overtime_type)
        outcome = self._validated(hourly_rate, overtime_type, hours)
        session = self.store.create(
            hourly_rate=hourly_rate,
            overtime_type=overtime_type,
            total_hours=hours,
            calculation=outcome.calculation,
            start_time=self.clock.now(),
            warnings=outcome.warnings,
        )
        sessions_started.add(1, {"overtime_type": overtime_type, "open_ended": session.is_open_ended})
        logger.info(
            "session_started",
            session_id=session.id,
            overtime_type=overtime_type,
            total_hours=hours,
            warnings=len(outcome.warnings),
        )
        return session

    def advance(self, session: OvertimeSession) -> bool:
        """Apply the live-earnings transition; records tracking on natural completion."""
        completed = advance_session(session, self.clock.now())
        if completed:
            self.tracker.record_completion(self.user_id, session.committed_hours)
            sessions_ended.add(1, {"reason": "completed"})
            logger.info("session_completed", session_id=session.id, earnings=session.current_earnings)
        return completed

    def stop_session(self, session_id: str) -> OvertimeSession:
        session = self.store.get(session_id)
        # A deadline that already passed wins over the manual stop.
        self.advance(session)
        committed = finish_session(session, self.clock.now())
        self.tracker.record_completion(self.user_id, committed)
        sessions_ended.add(1, {"reason": "stopped"})
        logger.info(
            "session_stopped",
            session_id=session.id,
            duration=session.duration,
            earnings=session.current_earnings,
            committed_hours=committed,
        )
        return session

    def get_session_status(self, session_id: str) -> Dict[str, Any]:
        session = self.store.get(session_id)
        self.advance(session)
        return session.status()

    def find_session(self, session_id: str) -> Optional[OvertimeSession]:
        return self.store.find(session_id)

    def list_sessions(self) -> List[OvertimeSession]:
        return list(self.store)

    def active_sessions(self) -> List[OvertimeSession]:
        return self.store.active()

    def unannounced_completions(self) -> List[OvertimeSession]:
        """Sessions that completed naturally but whose completion was not pushed yet."""
        return self.store.pending_completions()

    def get_tracking(self) -> OvertimeTracking:
        return self.tracker.get_tracking(self.user_id)
