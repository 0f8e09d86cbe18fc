from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from overtime_counter.models import OvertimeSession, PayCalculation


class CalculationOut(BaseModel):
    hourlyRate: float
    multiplier: float
    totalPay: float
    ratePerSecond: float

    @classmethod
    def from_calculation(cls, calculation: PayCalculation) -> "CalculationOut":
        return cls(**calculation.to_dict())


class SessionOut(BaseModel):
    id: str
    hourlyRate: float
    overtimeType: str
    totalHours: float | None = None
    calculation: CalculationOut
    startTime: datetime
    endTime: datetime | None = None
    duration: float | None = None
    isActive: bool
    currentEarnings: float
    elapsedTime: float
    remainingTime: float | None = None
    warnings: list[str] = []
    isOpenEnded: bool
    committedHours: float | None = None
    state: str

    @classmethod
    def from_session(cls, session: OvertimeSession) -> "SessionOut":
        return cls(
            id=session.id,
            hourlyRate=session.hourly_rate,
            overtimeType=session.overtime_type,
            totalHours=session.total_hours,
            calculation=CalculationOut.from_calculation(session.calculation),
            startTime=session.start_time,
            endTime=session.end_time,
            duration=session.duration,
            isActive=session.is_active,
            currentEarnings=session.current_earnings,
            elapsedTime=session.elapsed_time,
            remainingTime=session.remaining_time,
            warnings=list(session.warnings),
            isOpenEnded=session.is_open_ended,
            committedHours=session.committed_hours,
            state=session.state.value,
        )
