from __future__ import annotations

import math
from typing import Dict

from .exceptions import ValidationError
from .models import OvertimeType, PayCalculation

SECONDS_PER_HOUR = 3600
DAYS_PER_MONTH = 30
DEFAULT_MULTIPLIER = 1.5

# Labour Proclamation No. 1156/2019
OVERTIME_MULTIPLIERS: Dict[str, float] = {
    OvertimeType.NORMAL.value: 1.5,
    OvertimeType.NIGHT.value: 1.75,
    OvertimeType.SUNDAY.value: 2.0,
    OvertimeType.HOLIDAY.value: 2.5,
}


def multiplier_for(overtime_type: str) -> float:
    return OVERTIME_MULTIPLIERS.get(overtime_type, DEFAULT_MULTIPLIER)


def hourly_rate_from_salary(salary: float, daily_hours: float) -> float:
    """Monthly salary spread over a 30 day month of ``daily_hours`` days."""
    if not math.isfinite(daily_hours) or daily_hours <= 0:
        raise ValidationError("Daily working hours must be greater than 0")
    if not math.isfinite(salary) or salary <= 0:
        raise ValidationError("Salary must be greater than 0")
    return salary / (DAYS_PER_MONTH * daily_hours)


def compute_pay(hourly_rate: float, overtime_type: str, hours: float) -> PayCalculation:
    if not math.isfinite(hours) or hours <= 0:
        raise ValidationError("Overtime hours must be greater than 0")
    if not math.isfinite(hourly_rate) or hourly_rate <= 0:
        raise ValidationError("Invalid hourly rate")
    multiplier = multiplier_for(overtime_type)
    total_pay = hourly_rate * multiplier * hours
    rate_per_second = total_pay / (hours * SECONDS_PER_HOUR)
    if not math.isfinite(total_pay) or rate_per_second <= 0:
        raise ValidationError("Overtime pay is out of range")
    return PayCalculation(
        hourly_rate=hourly_rate,
        multiplier=multiplier,
        total_pay=total_pay,
        rate_per_second=rate_per_second,
    )


def compute_pay_from_salary(salary: float, daily_hours: float, overtime_type: str, hours: float) -> PayCalculation:
    return compute_pay(hourly_rate_from_salary(salary, daily_hours), overtime_type, hours)
