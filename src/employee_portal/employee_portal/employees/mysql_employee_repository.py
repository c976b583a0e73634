from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchall, fetchone
from .model import EMPLOYEE_COLUMNS, Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT id, name, email, role, department, position, joined_date,
           phone, address, profile_picture, emergency_contact, salary
    FROM employees
"""


def _row_to_employee(r: dict) -> Employee:
    salary = r.get("salary")
    return Employee(
        id=str(r["id"]),
        name=r["name"],
        email=r["email"],
        role=Role(r["role"]),
        department=r.get("department"),
        position=r.get("position"),
        joined_date=r.get("joined_date"),
        phone=r.get("phone"),
        address=r.get("address"),
        profile_picture=r.get("profile_picture"),
        emergency_contact=r.get("emergency_contact"),
        salary=float(salary) if salary is not None else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def create(self, employee: Employee, *, password_hash: Optional[str] = None) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(
                        id, name, email, role, department, position, joined_date,
                        phone, address, profile_picture, emergency_contact, salary
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee.id,
                        employee.name,
                        employee.email,
                        employee.role.value,
                        employee.department,
                        employee.position,
                        employee.joined_date,
                        employee.phone,
                        employee.address,
                        employee.profile_picture,
                        employee.emergency_contact,
                        employee.salary,
                    ),
                )
                if password_hash:
                    cur.execute(
                        "INSERT INTO employee_credentials(employee_id, password_hash) VALUES(%s,%s)",
                        (employee.id, password_hash),
                    )
        except DuplicateKeyError as e:
            raise DuplicateKeyError("Email already exists") from e

    def update_fields(self, employee_id: str, changes: Mapping[str, Any]) -> bool:
        set_clause, values = build_set_clause(changes, EMPLOYEE_COLUMNS)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE employees SET {set_clause} WHERE id=%s", tuple(values + [employee_id]))
                return cur.rowcount > 0
        except DuplicateKeyError as e:
            raise DuplicateKeyError("Email already exists") from e

    def delete_by_id(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_id,))
            return cur.rowcount > 0
