from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .models import OvertimeTracking, ValidationResult


@dataclass(frozen=True)
class OvertimeLimits:
    """Statutory overtime caps. Exceeding them is reported, never blocked."""

    max_hours_per_day: float = 4
    max_hours_per_week: float = 12
    max_hours_per_year: float = 100
    sustainable_hours: float = 8

    def to_dict(self) -> Dict[str, float]:
        return {
            "MAX_HOURS_PER_DAY": self.max_hours_per_day,
            "MAX_HOURS_PER_WEEK": self.max_hours_per_week,
            "MAX_HOURS_PER_YEAR": self.max_hours_per_year,
        }


OVERTIME_LIMITS = OvertimeLimits()


def _window_warning(window: str, cap: float, current: float, hours: float) -> str:
    new_total = current + hours
    return (
        f"Warning: This would exceed {window} limit of {cap:g} hours "
        f"(current: {current:.1f}h + {hours:g}h = {new_total:.1f}h)"
    )


def validate_overtime_hours(
    hours: float,
    overtime_type: str,
    tracking: Optional[OvertimeTracking] = None,
    limits: OvertimeLimits = OVERTIME_LIMITS,
) -> ValidationResult:
    # overtime_type does not affect the caps today; kept so callers pass the full request.
    tracking = tracking or OvertimeTracking()
    result = ValidationResult()

    if hours <= 0:
        result.errors.append("Overtime hours must be greater than 0")
        return result

    if hours > limits.max_hours_per_day:
        result.warnings.append(
            f"Warning: Exceeding legal limit of {limits.max_hours_per_day:g} hours per day"
        )

    if tracking.weekly + hours > limits.max_hours_per_week:
        result.warnings.append(_window_warning("weekly", limits.max_hours_per_week, tracking.weekly, hours))

    if tracking.yearly + hours > limits.max_hours_per_year:
        result.warnings.append(_window_warning("yearly", limits.max_hours_per_year, tracking.yearly, hours))

    if hours > limits.sustainable_hours:
        result.warnings.append("Warning: Very high overtime hours may not be sustainable")

    return result
