from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_iso_date
from ..common.ids import new_id
from ..common.validators import (
    is_blank,
    reject_unknown_fields,
    require_enum,
    require_min_length,
    require_non_empty,
)
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import EMPLOYEE_COLUMNS, Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("department", "position", "phone", "address", "profilePicture", "emergencyContact")


def _clean_email(value: Any) -> str:
    email = require_non_empty(value, "email")
    if "@" not in email:
        raise ValidationError("email is not a valid address")
    return email


def _clean_salary(value: Any) -> Optional[float]:
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError("salary must be a number")
    try:
        salary = float(value)
    except (TypeError, ValueError):
        raise ValidationError("salary must be a number")
    if salary < 0:
        raise ValidationError("salary must be >= 0")
    return salary


def _clean_field(field: str, value: Any) -> Any:
    if field == "name":
        return require_non_empty(value, "name")
    if field == "email":
        return _clean_email(value)
    if field == "role":
        return require_enum(value, Role, "role")
    if field == "joinedDate":
        return None if is_blank(value) else parse_iso_date(value, "joinedDate")
    if field == "salary":
        return _clean_salary(value)
    if field in _TEXT_FIELDS:
        return None if is_blank(value) else str(value).strip()
    raise ValidationError(f"Unrecognized field: {field}")


class EmployeeService:
    """Use case: manage employees (admin screens)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(self, body: Mapping[str, Any]) -> Employee:
        if is_blank(body.get("name")) or is_blank(body.get("email")):
            raise ValidationError("Name and email are required")
        reject_unknown_fields(body, list(EMPLOYEE_COLUMNS) + ["password"])

        cleaned: Dict[str, Any] = {
            field: _clean_field(field, body[field]) for field in EMPLOYEE_COLUMNS if field in body
        }

        password_hash = None
        if not is_blank(body.get("password")):
            password = require_min_length(str(body["password"]), "password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        employee = Employee(
            id=new_id(),
            name=cleaned["name"],
            email=cleaned["email"],
            role=cleaned.get("role") or Role.EMPLOYEE,
            department=cleaned.get("department"),
            position=cleaned.get("position"),
            joined_date=cleaned.get("joinedDate"),
            phone=cleaned.get("phone"),
            address=cleaned.get("address"),
            profile_picture=cleaned.get("profilePicture"),
            emergency_contact=cleaned.get("emergencyContact"),
            salary=cleaned.get("salary"),
        )
        self._employees.create(employee, password_hash=password_hash)
        logger.info("Employee added with id=%s", employee.id)
        return employee

    def update_employee(self, employee_id: str, body: Mapping[str, Any]) -> None:
        if not body:
            raise ValidationError("No fields to update")
        reject_unknown_fields(body, EMPLOYEE_COLUMNS)

        changes = {field: _clean_field(field, value) for field, value in body.items()}
        if not self._employees.update_fields(employee_id, changes):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s updated (%s)", employee_id, ", ".join(sorted(changes)))

    def delete_employee(self, employee_id: str) -> None:
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted", employee_id)

