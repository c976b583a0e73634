from __future__ import annotations

import pytest

from employee_portal.client.api_client import ApiClient, ApiError
from employee_portal.client.session import PortalSession
from employee_portal.core.exceptions import AuthorizationError

BASE_URL = "http://portal.test"


@pytest.fixture
def api(client):
    """ApiClient whose transport hands requests to the Flask test client."""

    def transport(method, url, body, headers):
        resp = client.open(url[len(BASE_URL):], method=method, data=body, headers=headers)
        return resp.status_code, resp.data

    return ApiClient(BASE_URL, transport=transport)


def _signed_in(api, email, password):
    session = PortalSession(api)
    session.login(email, password)
    return session


def test_api_error_carries_status_and_message(api):
    with pytest.raises(ApiError) as exc:
        api.get("/api/employees/missing")
    assert exc.value.status == 404
    assert exc.value.message == "Employee not found"


def test_query_params_skip_none(api):
    assert api.get("/api/leave-requests", employeeId=None, status="pending") == []


def test_employee_cannot_call_admin_operations(api, db):
    session = _signed_in(api, "employee@company.com", "emp123")

    assert not session.is_admin
    with pytest.raises(AuthorizationError):
        session.add_employee({"name": "Sneaky", "email": "sneaky@company.com"})
    with pytest.raises(AuthorizationError):
        session.login_logs()
    assert len(db.employees) == 2


def test_admin_mutations_refresh_the_cache(api):
    session = _signed_in(api, "admin@company.com", "admin123")

    created = session.add_employee({"name": "Mike Johnson", "email": "mike@company.com"})
    assert session.employees.get(created["id"])["name"] == "Mike Johnson"

    session.update_employee(created["id"], {"position": "QA"})
    assert session.employees.get(created["id"])["position"] == "QA"

    session.delete_employee(created["id"])
    assert session.employees.get(created["id"]) is None


def test_leave_flow_uses_cached_version_and_refreshes_on_conflict(api, db):
    employee = _signed_in(api, "employee@company.com", "emp123")
    leave = employee.apply_for_leave(start_date="2026-11-02", end_date="2026-11-03", leave_type="sick", reason="Flu")

    admin = _signed_in(api, "admin@company.com", "admin123")
    other_admin = _signed_in(api, "admin@company.com", "admin123")
    admin.leaves.refresh()
    other_admin.leaves.refresh()

    admin.approve_leave(leave["id"], comments="Get well")
    assert admin.leaves.get(leave["id"])["status"] == "approved"

    with pytest.raises(ApiError) as exc:
        other_admin.reject_leave(leave["id"])
    assert exc.value.is_conflict
    assert exc.value.current_version == 1
    # the stale cache was replaced by the server's copy
    assert other_admin.leaves.get(leave["id"])["version"] == 1
    assert other_admin.leaves.get(leave["id"])["status"] == "approved"


def test_clock_in_and_logout(api, db):
    session = _signed_in(api, "employee@company.com", "emp123")
    record = session.clock_in()

    assert session.attendance.get(record["id"])["employeeId"] == "2"

    session.logout()
    assert not session.is_authenticated
    assert [log.action.value for log in db.login_logs] == ["login", "logout"]
