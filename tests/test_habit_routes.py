"""End-to-end API tests over the SQL store."""

from __future__ import annotations

from datetime import date, timedelta

from conftest import make_token
from dependencies import get_store
from errors import BackendOperationError


def create(client, headers, **body):
    return client.post("/api/v1/habits", json=body, headers=headers)


def test_health_check_needs_no_auth(client):
    resp = client.get("/api/v1/health-check")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_requests_without_token_are_rejected(client):
    assert client.get("/api/v1/habits").status_code == 401
    assert client.get("/api/v1/habits", headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_token_for_wrong_audience_is_rejected(client, owner):
    headers = {"Authorization": f"Bearer {make_token(owner, aud='anon')}"}
    assert client.get("/api/v1/habits", headers=headers).status_code == 401


def test_create_and_list(client, auth_headers, owner):
    resp = create(client, auth_headers, name="  Meditate ", description="", color="#8B5CF6")
    assert resp.status_code == 201
    habit = resp.json()["data"]
    assert habit["name"] == "Meditate"
    assert habit["description"] is None
    assert habit["user_id"] == owner

    listed = client.get("/api/v1/habits", headers=auth_headers).json()
    assert [h["id"] for h in listed] == [habit["id"]]


def test_validation_errors_are_422_with_message(client, auth_headers):
    resp = create(client, auth_headers, name="   ")
    assert resp.status_code == 422
    assert resp.json() == {"detail": "Please enter a habit name"}

    resp = create(client, auth_headers, name="z" * 51)
    assert resp.status_code == 422
    assert "50 characters" in resp.json()["detail"]


def test_colors_endpoint_lists_palette(client):
    body = client.get("/api/v1/habits/colors").json()
    assert len(body["colors"]) == 8
    assert body["default"] == body["colors"][0]


def test_toggle_round_trip_and_stats(client, auth_headers):
    first = create(client, auth_headers, name="Read").json()["data"]
    create(client, auth_headers, name="Walk")

    resp = client.post(f"/api/v1/habits/{first['id']}/toggle", json={"is_completed_today": False}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["completed"] is True

    logs = client.get("/api/v1/habits/today", headers=auth_headers).json()
    assert [log["habit_id"] for log in logs] == [first["id"]]
    assert logs[0]["completed_at"] == date.today().isoformat()

    stats = client.get("/api/v1/habits/stats", headers=auth_headers).json()
    assert stats == {"completed_today": 1, "total_habits": 2, "completion_rate": 50}

    client.post(f"/api/v1/habits/{first['id']}/toggle", json={"is_completed_today": True}, headers=auth_headers)
    assert client.get("/api/v1/habits/today", headers=auth_headers).json() == []


def test_duplicate_check_in_is_reported_not_doubled(client, auth_headers):
    habit = create(client, auth_headers, name="Read").json()["data"]
    url = f"/api/v1/habits/{habit['id']}/toggle"

    assert client.post(url, json={"is_completed_today": False}, headers=auth_headers).status_code == 200
    dup = client.post(url, json={"is_completed_today": False}, headers=auth_headers)
    assert dup.status_code == 502
    assert "UNIQUE" in dup.json()["detail"]
    assert len(client.get("/api/v1/habits/today", headers=auth_headers).json()) == 1


def test_set_completion_is_idempotent(client, auth_headers):
    habit = create(client, auth_headers, name="Read").json()["data"]
    url = f"/api/v1/habits/{habit['id']}/completion"

    for _ in range(2):
        resp = client.put(url, json={"completed": True}, headers=auth_headers)
        assert resp.status_code == 200
    assert len(client.get("/api/v1/habits/today", headers=auth_headers).json()) == 1

    client.put(url, json={"completed": False}, headers=auth_headers)
    assert client.get("/api/v1/habits/today", headers=auth_headers).json() == []


def test_set_completion_rejects_future_days(client, auth_headers):
    habit = create(client, auth_headers, name="Read").json()["data"]
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    resp = client.put(
        f"/api/v1/habits/{habit['id']}/completion",
        json={"completed": True, "date": tomorrow},
        headers=auth_headers,
    )
    assert resp.status_code == 422
    assert "future day" in resp.json()["detail"]


def test_set_completion_accepts_a_past_date(client, auth_headers):
    habit = create(client, auth_headers, name="Read").json()["data"]
    yesterday = (date.today() - timedelta(days=1)).isoformat()

    resp = client.put(
        f"/api/v1/habits/{habit['id']}/completion",
        json={"completed": True, "date": yesterday},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["completed_at"] == yesterday
    assert client.get("/api/v1/habits/today", headers=auth_headers).json() == []


def test_check_in_on_someone_elses_habit_is_404(client, auth_headers):
    habit = create(client, auth_headers, name="Read").json()["data"]
    other = {"Authorization": f"Bearer {make_token('another-user')}"}

    resp = client.post(f"/api/v1/habits/{habit['id']}/toggle", json={"is_completed_today": False}, headers=other)
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Habit not found"}

    resp = client.put(f"/api/v1/habits/{habit['id']}/completion", json={"completed": True}, headers=other)
    assert resp.status_code == 404
    assert client.get("/api/v1/habits/today", headers=auth_headers).json() == []


def test_delete_removes_habit(client, auth_headers):
    habit = create(client, auth_headers, name="Read").json()["data"]

    assert client.delete(f"/api/v1/habits/{habit['id']}", headers=auth_headers).status_code == 200
    assert client.get("/api/v1/habits", headers=auth_headers).json() == []
    assert client.delete(f"/api/v1/habits/{habit['id']}", headers=auth_headers).status_code == 404


def test_users_only_see_their_own_habits(client, auth_headers):
    create(client, auth_headers, name="Mine")
    other = {"Authorization": f"Bearer {make_token('another-user')}"}
    assert client.get("/api/v1/habits", headers=other).json() == []


def test_dashboard_combines_habits_logs_and_stats(client, auth_headers, owner):
    read = create(client, auth_headers, name="Read").json()["data"]
    create(client, auth_headers, name="Walk")
    create(client, auth_headers, name="Cook")
    client.post(f"/api/v1/habits/{read['id']}/toggle", json={"is_completed_today": False}, headers=auth_headers)

    body = client.get("/api/v1/dashboard", headers=auth_headers).json()

    assert body["date"] == date.today().isoformat()
    assert body["user"]["id"] == owner
    assert body["logs_error"] is None
    assert body["stats"] == {"completed_today": 1, "total_habits": 3, "completion_rate": 33}
    done = {h["name"]: h["completed_today"] for h in body["habits"]}
    assert done == {"Read": True, "Walk": False, "Cook": False}
    assert all(h["streak"] == 0 for h in body["habits"])


def test_dashboard_reports_log_failures(client, auth_headers, store):
    from main import app

    create(client, auth_headers, name="Read")

    class FlakyLogs:
        def select(self, table, filters=None, order_by=None, descending=False):
            if table == "habit_logs":
                raise BackendOperationError("connection reset")
            return store.select(table, filters, order_by, descending)

    app.dependency_overrides[get_store] = lambda: FlakyLogs()
    body = client.get("/api/v1/dashboard", headers=auth_headers).json()

    assert body["logs_error"] == "connection reset"
    assert [h["completed_today"] for h in body["habits"]] == [False]
    assert body["stats"]["completed_today"] == 0
