from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from employee_portal.container import wire_container
from employee_portal.core.enums import Role
from employee_portal.employees.model import Employee
from employee_portal.main import create_app

from fakes import (
    InMemoryAttendance,
    InMemoryCredentials,
    InMemoryDB,
    InMemoryEmployees,
    InMemoryLeaves,
    InMemoryLoginLogs,
    InMemoryTasks,
)

ADMIN = Employee(id="1", name="Admin User", email="admin@company.com", role=Role.ADMIN, department="Management")
EMPLOYEE = Employee(id="2", name="John Employee", email="employee@company.com", department="Development")


@pytest.fixture
def db():
    store = InMemoryDB()
    store.employees = {ADMIN.id: ADMIN, EMPLOYEE.id: EMPLOYEE}
    store.credentials = {
        ADMIN.id: generate_password_hash("admin123"),
        EMPLOYEE.id: generate_password_hash("emp123"),
    }
    return store


@pytest.fixture
def container(db):
    return wire_container(
        employees_repo=InMemoryEmployees(db),
        credentials_repo=InMemoryCredentials(db),
        tasks_repo=InMemoryTasks(db),
        attendance_repo=InMemoryAttendance(db),
        leaves_repo=InMemoryLeaves(db),
        login_logs_repo=InMemoryLoginLogs(db),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
