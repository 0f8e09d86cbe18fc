from fastapi import APIRouter, Depends
from pydantic import BaseModel

from overtime_counter.api.deps import get_service
from overtime_counter.service import OvertimeService

router = APIRouter(prefix="/api", tags=["tracking"])


class TrackingTotals(BaseModel):
    weekly: float
    yearly: float


class TrackingOut(BaseModel):
    success: bool = True
    tracking: TrackingTotals
    limits: dict[str, float]


@router.get("/overtime-tracking", response_model=TrackingOut)
async def overtime_tracking(service: OvertimeService = Depends(get_service)) -> TrackingOut:
    tracking = service.get_tracking()
    return TrackingOut(
        tracking=TrackingTotals(**tracking.to_dict()),
        limits=service.limits.to_dict(),
    )
