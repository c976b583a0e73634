from __future__ import annotations

from datetime import datetime

import employee_portal.attendance.service as attendance_service_module


def test_employee_round_trip(client):
    payload = {"name": "Jane Smith", "email": "jane@company.com", "role": "employee", "department": "Marketing"}

    resp = client.post("/api/employees", json=payload)
    assert resp.status_code == 201
    created = resp.get_json()

    fetched = client.get(f"/api/employees/{created['id']}").get_json()
    for key, value in payload.items():
        assert fetched[key] == value
    assert "password" not in fetched


def test_employee_errors(client):
    assert client.post("/api/employees", json={"name": "No Email"}).status_code == 400
    assert client.post("/api/employees", data="not json", content_type="text/plain").status_code == 400
    assert client.post("/api/employees", json=["a", "list"]).status_code == 400
    assert client.put("/api/employees/2", json={"salary": 10, "isAdmin": True}).status_code == 400
    assert client.get("/api/employees/missing").status_code == 404

    resp = client.delete("/api/employees/missing")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Employee not found"}
    assert len(client.get("/api/employees").get_json()) == 2


def test_task_with_dangling_assignee_is_rejected_without_a_row(client):
    resp = client.post(
        "/api/tasks",
        json={
            "title": "Audit",
            "description": "Quarterly audit",
            "assignedTo": "99",
            "assignedBy": "1",
            "dueDate": "2026-12-01",
            "priority": "medium",
            "status": "pending",
        },
    )

    assert resp.status_code == 400
    assert "AssignedTo" in resp.get_json()["error"]
    assert client.get("/api/tasks").get_json() == []


def test_update_missing_task_is_not_found_before_assignee_check(client):
    resp = client.put("/api/tasks/missing", json={"assignedTo": "99"})

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Task not found"}


def test_task_round_trip_and_delete(client):
    payload = {
        "title": "Audit",
        "description": "Quarterly audit",
        "assignedTo": "2",
        "assignedBy": "1",
        "dueDate": "2026-12-01",
        "priority": "medium",
        "status": "pending",
    }
    created = client.post("/api/tasks", json=payload).get_json()

    fetched = client.get(f"/api/tasks/{created['id']}").get_json()
    for key, value in payload.items():
        assert fetched[key] == value
    assert fetched["createdAt"]
    assert [t["id"] for t in client.get("/api/tasks/employee/2").get_json()] == [created["id"]]

    assert client.delete(f"/api/tasks/{created['id']}").status_code == 200
    assert client.delete(f"/api/tasks/{created['id']}").status_code == 404


def test_attendance_duplicate_day_and_delete(client):
    payload = {"employeeId": "2", "date": "2026-10-12", "clockIn": "09:00", "status": "present"}
    first = client.post("/api/attendance", json=payload)
    assert first.status_code == 201

    second = client.post("/api/attendance", json=dict(payload, clockIn="09:30"))
    assert second.status_code == 400

    records = client.get("/api/attendance/employee/2").get_json()
    assert len(records) == 1
    assert records[0]["clockIn"] == "09:00"

    assert client.delete("/api/attendance/missing").status_code == 404
    assert client.delete(f"/api/attendance/{first.get_json()['id']}").status_code == 200


def test_clock_in_and_out_endpoints(client, monkeypatch):
    moments = iter([datetime(2026, 10, 12, 10, 5), datetime(2026, 10, 12, 18, 0)])
    monkeypatch.setattr(attendance_service_module, "now_local", lambda: next(moments))

    resp = client.post("/api/attendance/clock-in", json={"employeeId": "2"})
    assert resp.status_code == 201
    assert resp.get_json()["status"] == "late"

    resp = client.post("/api/attendance/clock-out", json={"employeeId": "2"})
    assert resp.status_code == 200
    assert resp.get_json()["clockOut"] == "18:00"


def test_login_logout_and_login_logs(client):
    resp = client.post("/api/auth/login", json={"email": "employee@company.com", "password": "emp123"})
    assert resp.status_code == 200
    assert resp.get_json()["id"] == "2"

    assert client.post("/api/auth/login", json={"email": "employee@company.com", "password": "nope"}).status_code == 401
    assert client.post("/api/auth/logout", json={"employeeId": "2"}).status_code == 200

    logs = client.get("/api/login-logs?employeeId=2").get_json()
    assert sorted(log["action"] for log in logs) == ["login", "logout"]

    assert client.post("/api/login-logs", json={"employeeId": "2", "action": "dance"}).status_code == 400
    assert client.post("/api/login-logs", json={"employeeId": "1", "action": "login"}).status_code == 201


def test_cors_header_on_api_responses(client):
    resp = client.get("/api/employees", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
