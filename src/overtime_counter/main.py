from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from overtime_counter.api.deps import get_service
from overtime_counter.api.routes import health
from overtime_counter.core.config import settings
from overtime_counter.core.logging import configure_logging, get_logger
from overtime_counter.core.monitoring import configure_error_monitoring
from overtime_counter.core.observability import configure_observability
from overtime_counter.domains.calculator.router import router as calculator_router
from overtime_counter.domains.realtime.router import router as realtime_router
from overtime_counter.domains.sessions.router import router as sessions_router
from overtime_counter.domains.tracking.router import router as tracking_router
from overtime_counter.exceptions import OvertimeError
from overtime_counter.scheduler import TickScheduler

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(calculator_router)
app.include_router(sessions_router)
app.include_router(tracking_router)
app.include_router(realtime_router)


@app.exception_handler(OvertimeError)
async def overtime_error_handler(request: Request, exc: OvertimeError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.on_event("startup")
async def startup_event() -> None:
    scheduler = TickScheduler(get_service(), interval=settings.tick_interval_seconds)
    await scheduler.start()
    app.state.scheduler = scheduler
    logger.info("startup_complete", env=settings.env, tick_interval=settings.tick_interval_seconds)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    scheduler: TickScheduler | None = getattr(app.state, "scheduler", None)
    if scheduler:
        await scheduler.stop()
    logger.info("shutdown_complete")


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "message": "Overtime counter API running",
        "environment": settings.env,
        "docs": "/docs",
    }


def run() -> None:
    import uvicorn

    uvicorn.run("overtime_counter.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
