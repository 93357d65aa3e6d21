"""
Tests for the timetable HTTP API.
"""

import sys
import os
import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.main import app
from app.api import routes
from app.api.routes import get_service
from app.services.storage import TimetableStorage
from app.services.timetable import TimetableService


@pytest.fixture
def client(tmp_path):
    service = TimetableService(TimetableStorage(str(tmp_path / "timetable.json")))
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def add(client, name, days, start, end, location=None):
    body = {"name": name, "days": days, "startTime": start, "endTime": end}
    if location is not None:
        body["location"] = location
    return client.post("/api/classes", json=body)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_add_and_list_classes(client):
    response = add(client, "Maths", ["Monday", "Wednesday"], "9:00", "10:30", location="Room 1")

    assert response.status_code == 201
    created = response.json()
    assert created["startTime"] == "09:00"
    assert created["days"] == ["Monday", "Wednesday"]
    assert created["id"].startswith("class_")
    assert created["color"]

    listing = client.get("/api/classes").json()
    assert [c["id"] for c in listing["classes"]] == [created["id"]]
    assert listing["lastUpdated"]
    assert listing["conflictingIds"] == []


@pytest.mark.parametrize("body", [
    {"name": "", "days": ["Monday"], "startTime": "09:00", "endTime": "10:00"},
    {"name": "   ", "days": ["Monday"], "startTime": "09:00", "endTime": "10:00"},
    {"name": "Maths", "days": [], "startTime": "09:00", "endTime": "10:00"},
    {"name": "Maths", "days": ["Someday"], "startTime": "09:00", "endTime": "10:00"},
    {"name": "Maths", "days": ["Monday"], "startTime": "24:00", "endTime": "10:00"},
    {"name": "Maths", "days": ["Monday"], "startTime": "09:60", "endTime": "10:00"},
    {"name": "Maths", "days": ["Monday"], "startTime": "10:00", "endTime": "10:00"},
    {"name": "Maths", "days": ["Monday"], "startTime": "11:00", "endTime": "10:00"},
])
def test_invalid_class_is_rejected(client, body):
    response = client.post("/api/classes", json=body)

    assert response.status_code == 422
    assert client.get("/api/classes").json()["classes"] == []


def test_remove_class(client):
    created = add(client, "Maths", ["Monday"], "09:00", "10:00").json()

    response = client.delete(f"/api/classes/{created['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Maths"
    assert client.get("/api/classes").json()["classes"] == []


def test_remove_unknown_class(client):
    response = client.delete("/api/classes/class_missing")
    assert response.status_code == 404


def test_clear_classes(client):
    add(client, "Maths", ["Monday"], "09:00", "10:00")
    add(client, "Physics", ["Tuesday"], "09:00", "10:00")

    response = client.delete("/api/classes")

    assert response.status_code == 200
    assert client.get("/api/classes").json()["classes"] == []


def test_conflicts_one_entry_per_pair(client):
    maths = add(client, "Maths", ["Monday", "Tuesday"], "09:00", "10:30").json()
    physics = add(client, "Physics", ["Monday", "Tuesday"], "10:00", "11:00").json()

    conflicts = client.get("/api/conflicts").json()

    assert len(conflicts) == 1
    assert conflicts[0]["day"] == "Monday"
    assert conflicts[0]["days"] == ["Monday", "Tuesday"]
    assert conflicts[0]["description"] == (
        "Maths (9:00 AM-10:30 AM) and Physics (10:00 AM-11:00 AM) on Monday, Tuesday"
    )
    assert client.get("/api/classes").json()["conflictingIds"] == sorted([maths["id"], physics["id"]])


def test_validate_groups_days_per_pair(client):
    maths = add(client, "Maths", ["Monday", "Tuesday"], "09:00", "10:30").json()
    physics = add(client, "Physics", ["Tuesday", "Monday"], "10:00", "11:00").json()
    add(client, "Art", ["Monday"], "13:00", "14:00")

    validation = client.get("/api/validate").json()

    assert validation["is_valid"] is False
    assert validation["conflicting_pairs"] == 1
    violation = validation["violations"][0]
    assert (violation["class1"], violation["class2"]) == (maths["id"], physics["id"])
    assert violation["days"] == ["Monday", "Tuesday"]
    assert violation["description"] == "Maths (9:00 AM-10:30 AM) overlaps Physics (10:00 AM-11:00 AM)"


def test_validate_clash_free_timetable(client):
    add(client, "Maths", ["Monday"], "09:00", "10:00")
    add(client, "Physics", ["Monday"], "10:00", "11:00")

    validation = client.get("/api/validate").json()

    assert validation == {"is_valid": True, "conflicting_pairs": 0, "violations": []}


def test_arrange_resolves_conflicts(client):
    add(client, "Maths", ["Monday"], "09:00", "10:30")
    add(client, "Physics", ["Monday"], "10:00", "11:00")

    response = client.post("/api/arrange")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["unplaceable"] == []
    times = {c["name"]: (c["startTime"], c["endTime"]) for c in body["arranged"]}
    assert times == {"Maths": ("09:00", "10:30"), "Physics": ("06:00", "07:00")}
    assert client.get("/api/conflicts").json() == []


def test_arrange_reports_unplaceable(client):
    add(client, "All day", ["Monday"], "06:00", "22:00")
    add(client, "Short", ["Monday"], "09:00", "10:00")

    body = client.post("/api/arrange").json()

    assert body["success"] is False
    assert [c["name"] for c in body["unplaceable"]] == ["Short"]
    assert [c["name"] for c in client.get("/api/classes").json()["classes"]] == ["All day"]


def test_arrange_empty_timetable(client):
    response = client.post("/api/arrange")
    assert response.status_code == 400


def test_grid(client):
    add(client, "Physics", ["Monday"], "10:00", "11:00")
    add(client, "Maths", ["Monday", "Friday"], "07:30", "09:00")

    grid = client.get("/api/grid").json()

    assert len(grid["slots"]) == 17
    assert grid["slots"][0]["label"] == "6:00 AM"
    assert list(grid["days"]) == [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
    ]
    monday = grid["days"]["Monday"]
    assert [c["name"] for c in monday] == ["Maths", "Physics"]
    assert (monday[0]["top"], monday[0]["height"]) == (90, 90)
    assert monday[0]["timeLabel"] == "7:30 AM - 9:00 AM"
    assert monday[0]["hasConflict"] is False
    assert [c["name"] for c in grid["days"]["Friday"]] == ["Maths"]
    assert grid["days"]["Sunday"] == []


def test_bad_stored_data_reads_as_empty(client, tmp_path):
    (tmp_path / "timetable.json").write_text(json.dumps({"timetable_data": {
        "classes": [{"id": "1", "name": "Maths", "days": ["Monday"], "startTime": "9am", "endTime": "10:00"}],
        "lastUpdated": 12345
    }}), encoding="utf-8")

    response = client.get("/api/classes")

    assert response.status_code == 200
    assert response.json() == {"classes": [], "lastUpdated": None, "conflictingIds": []}
    assert client.get("/api/conflicts").json() == []


# Background arrange

class FakeTask:
    def __init__(self, task_id="task-123", error=None):
        self.task_id = task_id
        self.error = error

    def delay(self, *args, **kwargs):
        if self.error:
            raise self.error
        return SimpleNamespace(id=self.task_id)


def fake_async_result(state, result=None, info=None):
    def build(task_id, app=None):
        return SimpleNamespace(state=state, result=result, info=info)
    return build


def test_arrange_async_returns_task_id(client, monkeypatch):
    monkeypatch.setattr(routes, "arrange_timetable_task", FakeTask("task-123"))

    response = client.post("/api/arrange/async")

    assert response.status_code == 200
    body = response.json()
    assert body["task_id"] == "task-123"
    assert body["status"] == "PENDING"


def test_arrange_async_broker_down(client, monkeypatch):
    monkeypatch.setattr(routes, "arrange_timetable_task", FakeTask(error=ConnectionError("no broker")))

    response = client.post("/api/arrange/async")

    assert response.status_code == 500
    assert "no broker" in response.json()["detail"]


def test_arrange_status_success(client, monkeypatch):
    summary = {"success": True, "message": "done", "arranged": [], "unplaceable": []}
    monkeypatch.setattr(routes, "AsyncResult", fake_async_result("SUCCESS", result=summary))

    body = client.get("/api/arrange/status/task-123").json()

    assert body == {"task_id": "task-123", "status": "SUCCESS", "result": summary}


def test_arrange_status_failure(client, monkeypatch):
    monkeypatch.setattr(routes, "AsyncResult", fake_async_result("FAILURE", info=RuntimeError("boom")))

    body = client.get("/api/arrange/status/task-123").json()

    assert body["status"] == "FAILURE"
    assert body["message"] == "boom"


def test_arrange_status_pending(client, monkeypatch):
    monkeypatch.setattr(routes, "AsyncResult", fake_async_result("PENDING"))

    body = client.get("/api/arrange/status/task-123").json()

    assert body["status"] == "PENDING"
    assert body["message"] == "Task state: PENDING"


def test_arrange_status_backend_down(client, monkeypatch):
    def unavailable(task_id, app=None):
        raise ConnectionError("no backend")

    monkeypatch.setattr(routes, "AsyncResult", unavailable)

    response = client.get("/api/arrange/status/task-123")

    assert response.status_code == 500
    assert "no backend" in response.json()["detail"]
