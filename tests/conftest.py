from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from overtime_counter.api.deps import get_service
from overtime_counter.clock import DeterministicClock
from overtime_counter.main import app
from overtime_counter.notifications import NotificationHub
from overtime_counter.service import OvertimeService

START = datetime(2024, 3, 4, 18, 0, 0, tzinfo=timezone.utc)


class RecordingHub(NotificationHub):
    def __init__(self) -> None:
        super().__init__()
        self.published: list[tuple[str, str, dict]] = []

    def publish(self, session_id, event, payload):
        self.published.append((session_id, event, payload))
        return super().publish(session_id, event, payload)

    def events_for(self, session_id: str) -> list[str]:
        return [event for sid, event, _ in self.published if sid == session_id]


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(START)


@pytest.fixture
def hub() -> RecordingHub:
    return RecordingHub()


@pytest.fixture
def service(clock: DeterministicClock, hub: RecordingHub) -> OvertimeService:
    return OvertimeService(clock=clock, notifications=hub)


@pytest.fixture
def client(service: OvertimeService):
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
