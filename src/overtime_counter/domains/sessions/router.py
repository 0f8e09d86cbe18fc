from fastapi import APIRouter, Depends
from pydantic import BaseModel

from overtime_counter.api.deps import get_service
from overtime_counter.domains.calculator.router import CalculateRequest
from overtime_counter.domains.schemas import CalculationOut, SessionOut
from overtime_counter.service import OvertimeService

router = APIRouter(prefix="/api", tags=["sessions"])


class StartSessionOut(BaseModel):
    success: bool = True
    sessionId: str
    calculation: CalculationOut
    warnings: list[str]
    isOpenEnded: bool


class SessionEnvelope(BaseModel):
    success: bool = True
    session: SessionOut


class SessionListOut(BaseModel):
    success: bool = True
    sessions: list[SessionOut]


class SessionStatus(BaseModel):
    currentEarnings: float
    elapsedTime: float
    remainingTime: float | None = None
    isOpenEnded: bool
    isActive: bool


class SessionStatusOut(BaseModel):
    success: bool = True
    session: SessionStatus


@router.post("/start-session", response_model=StartSessionOut)
async def start_session(payload: CalculateRequest, service: OvertimeService = Depends(get_service)) -> StartSessionOut:
    session = service.start_session(payload.hourlyRate, payload.overtimeType, payload.hours)
    return StartSessionOut(
        sessionId=session.id,
        calculation=CalculationOut.from_calculation(session.calculation),
        warnings=session.warnings,
        isOpenEnded=session.is_open_ended,
    )


@router.post("/stop-session/{session_id}", response_model=SessionEnvelope)
async def stop_session(session_id: str, service: OvertimeService = Depends(get_service)) -> SessionEnvelope:
    session = service.stop_session(session_id)
    return SessionEnvelope(session=SessionOut.from_session(session))


@router.get("/sessions", response_model=SessionListOut)
async def list_sessions(service: OvertimeService = Depends(get_service)) -> SessionListOut:
    return SessionListOut(sessions=[SessionOut.from_session(s) for s in service.list_sessions()])


@router.get("/session-status/{session_id}", response_model=SessionStatusOut)
async def session_status(session_id: str, service: OvertimeService = Depends(get_service)) -> SessionStatusOut:
    return SessionStatusOut(session=SessionStatus(**service.get_session_status(session_id)))
