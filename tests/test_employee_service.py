from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from employee_portal.core.enums import Role
from employee_portal.core.exceptions import DuplicateKeyError, NotFoundError, ValidationError


def test_create_employee_defaults_role_and_stores_hashed_password(container, db):
    employee = container.employee_service.create_employee(
        {"name": "Jane Smith", "email": "jane@company.com", "department": "Marketing", "password": "secret1"}
    )

    assert employee.role == Role.EMPLOYEE
    assert db.employees[employee.id].department == "Marketing"
    assert db.credentials[employee.id] != "secret1"
    assert check_password_hash(db.credentials[employee.id], "secret1")
    assert "password" not in employee.to_dict()


def test_create_employee_requires_name_and_email(container):
    with pytest.raises(ValidationError, match="Name and email are required"):
        container.employee_service.create_employee({"name": "No Email"})


def test_create_employee_rejects_duplicate_email(container):
    with pytest.raises(DuplicateKeyError):
        container.employee_service.create_employee({"name": "Dup", "email": "admin@company.com"})


def test_create_employee_rejects_short_password(container):
    with pytest.raises(ValidationError):
        container.employee_service.create_employee({"name": "X", "email": "x@company.com", "password": "123"})


def test_update_employee_applies_only_given_fields(container, db):
    container.employee_service.update_employee("2", {"position": "Senior Developer", "salary": 5000})

    updated = db.employees["2"]
    assert updated.position == "Senior Developer"
    assert updated.salary == 5000.0
    assert updated.name == "John Employee"


def test_update_employee_rejects_unknown_and_empty_bodies(container, db):
    with pytest.raises(ValidationError, match="Unrecognized fields: id"):
        container.employee_service.update_employee("2", {"id": "99"})
    with pytest.raises(ValidationError, match="No fields to update"):
        container.employee_service.update_employee("2", {})
    assert "99" not in db.employees


def test_update_employee_rejects_bad_role(container):
    with pytest.raises(ValidationError):
        container.employee_service.update_employee("2", {"role": "superuser"})


def test_update_and_delete_unknown_employee_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.employee_service.update_employee("nope", {"name": "Ghost"})
    with pytest.raises(NotFoundError):
        container.employee_service.delete_employee("nope")
