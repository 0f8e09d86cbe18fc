from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import List

from .core.logging import get_logger
from .core.observability import get_meter, get_tracer
from .models import OvertimeSession
from .notifications import EARNINGS_UPDATE, SESSION_COMPLETE
from .service import OvertimeService

logger = get_logger(__name__)
tracer = get_tracer()
meter = get_meter()
tick_duration = meter.create_histogram("overtime.tick.duration", unit="s", description="Time spent in one sweep")
tick_failures = meter.create_counter("overtime.tick.failures", description="Sessions that failed to advance")


@dataclass
class TickReport:
    updated: List[str] = field(default_factory=list)
    completed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


class TickScheduler:
    """Heartbeat that advances every active session and pushes the result.

    ``tick`` is a plain synchronous sweep so it can be driven directly with a
    deterministic clock; ``start``/``stop`` run it periodically on the event
    loop. Sessions completed by a status poll or a late stop are announced on
    the next sweep, so every natural completion is pushed exactly once.
    """

    def __init__(self, service: OvertimeService, interval: float = 1.0) -> None:
        self.service = service
        self.interval = interval
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _announce_completion(self, session: OvertimeSession) -> None:
        self.service.notifications.publish(
            session.id,
            SESSION_COMPLETE,
            {"finalEarnings": session.current_earnings, "totalDuration": session.duration},
        )
        session.completion_pending = False

    def tick(self) -> TickReport:
        report = TickReport()
        started = time.perf_counter()

        with tracer.start_as_current_span("overtime.tick") as span:
            for session in self.service.unannounced_completions():
                self._announce_completion(session)
                report.completed.append(session.id)

            for session in self.service.active_sessions():
                try:
                    if self.service.advance(session):
                        self._announce_completion(session)
                        report.completed.append(session.id)
                    else:
                        self.service.notifications.publish(
                            session.id,
                            EARNINGS_UPDATE,
                            {
                                "currentEarnings": session.current_earnings,
                                "elapsedTime": session.elapsed_time,
                                "remainingTime": session.remaining_time,
                                "isOpenEnded": session.is_open_ended,
                            },
                        )
                        report.updated.append(session.id)
                except Exception:
                    logger.exception("tick_session_failed", session_id=session.id)
                    tick_failures.add(1)
                    report.failed.append(session.id)

            span.set_attribute("overtime.sessions.updated", len(report.updated))
            span.set_attribute("overtime.sessions.completed", len(report.completed))

        tick_duration.record(time.perf_counter() - started)
        return report

    async def start(self) -> None:
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())
            logger.info("scheduler_started", interval=self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None
        logger.info("scheduler_stopped")

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("tick_failed")
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue
