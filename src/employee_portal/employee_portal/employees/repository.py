from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee, *, password_hash: Optional[str] = None) -> None:
        """Insert the employee (and its credential, when given) in one transaction."""

        raise NotImplementedError

    def update_fields(self, employee_id: str, changes: Mapping[str, Any]) -> bool:
        """Apply already-validated changes keyed by wire field name."""

        raise NotImplementedError

    def delete_by_id(self, employee_id: str) -> bool:
        raise NotImplementedError
