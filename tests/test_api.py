import pytest


def test_root_and_health(client):
    assert client.get("/").status_code == 200

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_calculate_preview(client):
    response = client.post("/api/calculate", json={"hourlyRate": 20.83, "overtimeType": "normal"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["isPreview"] is True
    assert body["calculation"]["totalPay"] == pytest.approx(31.245)
    assert body["warnings"] == []


def test_calculate_over_limit_warns(client):
    response = client.post("/api/calculate", json={"hourlyRate": 20, "overtimeType": "normal", "hours": 4.01})

    assert response.status_code == 200
    body = response.json()
    assert body["isPreview"] is False
    assert any("per day" in w for w in body["warnings"])


@pytest.mark.parametrize(
    "payload,error",
    [
        ({"overtimeType": "normal"}, "Hourly rate and overtime type are required"),
        ({"hourlyRate": 20}, "Hourly rate and overtime type are required"),
        ({"hourlyRate": -1, "overtimeType": "normal"}, "Invalid hourly rate"),
        ({"hourlyRate": 20, "overtimeType": "normal", "hours": -3}, "Overtime hours must be greater than 0"),
    ],
)
def test_calculate_validation_errors(client, payload, error):
    response = client.post("/api/calculate", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": error}


def test_calculate_from_salary(client):
    response = client.post(
        "/api/calculate-from-salary",
        json={"salary": 5000, "dailyHours": 8, "overtimeType": "normal", "hours": 2},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["hourlyRate"] == pytest.approx(20.8333, rel=1e-4)
    assert body["calculation"]["totalPay"] == pytest.approx(62.5)

    bad = client.post("/api/calculate-from-salary", json={"salary": 5000, "dailyHours": 0, "overtimeType": "normal"})
    assert bad.status_code == 400


def test_session_lifecycle(client, clock):
    started = client.post("/api/start-session", json={"hourlyRate": 20.83, "overtimeType": "normal", "hours": 2})
    assert started.status_code == 200
    body = started.json()
    session_id = body["sessionId"]
    assert body["isOpenEnded"] is False
    assert body["calculation"]["totalPay"] == pytest.approx(62.49)

    clock.advance(3600)
    status = client.get(f"/api/session-status/{session_id}").json()["session"]
    assert status["isActive"] is True
    assert status["remainingTime"] == 3600
    assert status["currentEarnings"] == pytest.approx(31.245)

    stopped = client.post(f"/api/stop-session/{session_id}")
    assert stopped.status_code == 200
    session = stopped.json()["session"]
    assert session["isActive"] is False
    assert session["duration"] == 3600
    assert session["state"] == "stopped-manually"

    tracking = client.get("/api/overtime-tracking").json()
    assert tracking["tracking"] == {"weekly": 2, "yearly": 2}
    assert tracking["limits"]["MAX_HOURS_PER_WEEK"] == 12

    again = client.post(f"/api/stop-session/{session_id}")
    assert again.status_code == 404


def test_open_ended_session_status(client, clock):
    session_id = client.post("/api/start-session", json={"hourlyRate": 40, "overtimeType": "holiday"}).json()["sessionId"]
    clock.advance(60)

    status = client.get(f"/api/session-status/{session_id}").json()["session"]

    assert status["isOpenEnded"] is True
    assert status["remainingTime"] is None
    assert status["currentEarnings"] == pytest.approx(100 / 60)


def test_list_sessions(client):
    client.post("/api/start-session", json={"hourlyRate": 20, "overtimeType": "normal"})
    client.post("/api/start-session", json={"hourlyRate": 30, "overtimeType": "night", "hours": 1})

    sessions = client.get("/api/sessions").json()["sessions"]

    assert len(sessions) == 2
    assert {s["overtimeType"] for s in sessions} == {"normal", "night"}
    assert all(s["isActive"] for s in sessions)


def test_unknown_session_is_404(client):
    assert client.post("/api/stop-session/nope").status_code == 404
    response = client.get("/api/session-status/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "Session not found"


@pytest.mark.parametrize(
    "body",
    [
        '{"hourlyRate": 20, "overtimeType": "normal", "hours": 1e400}',
        '{"hourlyRate": 1e400, "overtimeType": "normal"}',
        '{"hourlyRate": 1e308, "overtimeType": "normal", "hours": 2}',
    ],
)
def test_overflowing_numbers_are_rejected(client, body):
    response = client.post("/api/start-session", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.get("/api/sessions").json()["sessions"] == []
    assert client.get("/api/overtime-tracking").json()["tracking"] == {"weekly": 0, "yearly": 0}


def test_salary_overflow_is_rejected(client):
    response = client.post(
        "/api/calculate-from-salary",
        content='{"salary": 1e400, "dailyHours": 8, "overtimeType": "normal"}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
