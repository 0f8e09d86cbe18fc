import pytest

from overtime_counter.scheduler import TickScheduler


def _start(client, **payload):
    return client.post("/api/start-session", json={"hourlyRate": 20, "overtimeType": "normal", **payload}).json()["sessionId"]


def test_join_receives_snapshot_then_updates(client, service, clock):
    session_id = _start(client)

    with client.websocket_connect("/ws") as ws:
        assert ws.receive_json()["event"] == "connected"

        ws.send_json({"event": "join-session", "sessionId": session_id})
        snapshot = ws.receive_json()
        assert snapshot["event"] == "session-data"
        assert snapshot["data"]["id"] == session_id
        assert snapshot["data"]["isOpenEnded"] is True
        assert snapshot["data"]["state"] == "open-ended-active"
        assert snapshot["data"]["calculation"]["ratePerSecond"] == pytest.approx(30 / 3600)

        clock.advance(120)
        TickScheduler(service).tick()
        update = ws.receive_json()

    assert update["event"] == "earnings-update"
    assert update["data"]["elapsedTime"] == 120
    assert update["data"]["remainingTime"] is None
    assert update["data"]["currentEarnings"] == pytest.approx(1.0)


def test_completion_event(client, service, clock):
    session_id = _start(client, hours=1)

    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"event": "join-session", "sessionId": session_id})
        ws.receive_json()

        clock.advance(3600)
        TickScheduler(service).tick()
        message = ws.receive_json()

    assert message == {"event": "session-complete", "data": {"finalEarnings": 30.0, "totalDuration": 3600.0}}


def test_ping_and_malformed_frames(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()

        ws.send_json({"event": "ping"})
        assert ws.receive_json()["event"] == "pong"

        ws.send_text("not json")
        assert ws.receive_json() == {"event": "error", "data": {"message": "Malformed JSON"}}

        ws.send_json({"event": "dance"})
        assert ws.receive_json()["event"] == "error"
