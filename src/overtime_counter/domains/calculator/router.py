from fastapi import APIRouter, Depends
from pydantic import BaseModel

from overtime_counter.api.deps import get_service
from overtime_counter.domains.schemas import CalculationOut
from overtime_counter.service import OvertimeService

router = APIRouter(prefix="/api", tags=["calculator"])


class CalculateRequest(BaseModel):
    # Optional so that missing fields are reported as 400s by the service.
    hourlyRate: float | None = None
    overtimeType: str | None = None
    hours: float | None = None


class SalaryCalculateRequest(BaseModel):
    salary: float | None = None
    dailyHours: float | None = None
    overtimeType: str | None = None
    hours: float | None = None


class CalculateOut(BaseModel):
    success: bool = True
    calculation: CalculationOut
    warnings: list[str]
    isPreview: bool


class SalaryCalculateOut(CalculateOut):
    hourlyRate: float


@router.post("/calculate", response_model=CalculateOut)
async def calculate(payload: CalculateRequest, service: OvertimeService = Depends(get_service)) -> CalculateOut:
    outcome = service.calculate(payload.hourlyRate, payload.overtimeType, payload.hours)
    return CalculateOut(
        calculation=CalculationOut.from_calculation(outcome.calculation),
        warnings=outcome.warnings,
        isPreview=outcome.is_preview,
    )


@router.post("/calculate-from-salary", response_model=SalaryCalculateOut)
async def calculate_from_salary(
    payload: SalaryCalculateRequest, service: OvertimeService = Depends(get_service)
) -> SalaryCalculateOut:
    outcome = service.calculate_from_salary(payload.salary, payload.dailyHours, payload.overtimeType, payload.hours)
    return SalaryCalculateOut(
        hourlyRate=outcome.calculation.hourly_rate,
        calculation=CalculationOut.from_calculation(outcome.calculation),
        warnings=outcome.warnings,
        isPreview=outcome.is_preview,
    )
