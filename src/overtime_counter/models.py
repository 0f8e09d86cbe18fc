from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class OvertimeType(str, Enum):
    NORMAL = "normal"
    NIGHT = "night"
    SUNDAY = "sunday"
    HOLIDAY = "holiday"


class SessionState(str, Enum):
    OPEN_ENDED_ACTIVE = "open-ended-active"
    FIXED_ACTIVE = "fixed-active"
    STOPPED_MANUALLY = "stopped-manually"
    COMPLETED_NATURALLY = "completed-naturally"


@dataclass(frozen=True)
class PayCalculation:
    hourly_rate: float
    multiplier: float
    total_pay: float
    rate_per_second: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "hourlyRate": self.hourly_rate,
            "multiplier": self.multiplier,
            "totalPay": self.total_pay,
            "ratePerSecond": self.rate_per_second,
        }


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class OvertimeTracking:
    weekly: float = 0.0
    yearly: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"weekly": self.weekly, "yearly": self.yearly}


@dataclass
class OvertimeSession:
    id: str
    hourly_rate: float
    overtime_type: str
    total_hours: Optional[float]
    calculation: PayCalculation
    start_time: datetime
    warnings: List[str] = field(default_factory=list)
    is_active: bool = True
    current_earnings: float = 0.0
    elapsed_time: float = 0.0
    remaining_time: Optional[float] = None
    end_time: Optional[datetime] = None
    duration: Optional[float] = None
    committed_hours: Optional[float] = None
    state: SessionState = SessionState.FIXED_ACTIVE
    # set on natural completion until the completion has been pushed to subscribers
    completion_pending: bool = False

    def __post_init__(self) -> None:
        if self.is_open_ended and self.state is SessionState.FIXED_ACTIVE:
            self.state = SessionState.OPEN_ENDED_ACTIVE
        if not self.is_open_ended and self.remaining_time is None and self.is_active:
            self.remaining_time = self.max_seconds

    @property
    def is_open_ended(self) -> bool:
        return self.total_hours is None

    @property
    def max_seconds(self) -> Optional[float]:
        if self.total_hours is None:
            return None
        return self.total_hours * 3600

    def status(self) -> Dict[str, Any]:
        return {
            "currentEarnings": self.current_earnings,
            "elapsedTime": self.elapsed_time,
            "remainingTime": self.remaining_time,
            "isOpenEnded": self.is_open_ended,
            "isActive": self.is_active,
        }
