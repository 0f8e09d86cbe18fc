from fastapi import APIRouter, Depends

from overtime_counter.api.deps import get_service
from overtime_counter.service import OvertimeService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness probe")
async def healthcheck(service: OvertimeService = Depends(get_service)) -> dict[str, str | int]:
    return {
        "status": "ok",
        "activeSessions": len(service.active_sessions()),
        "subscribers": service.notifications.subscriber_count(),
    }
