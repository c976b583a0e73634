from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..common.datetime_utils import format_date
from ..core.enums import Role

# Wire field -> column. Doubles as the allow-list for partial updates.
EMPLOYEE_COLUMNS: Dict[str, str] = {
    "name": "name",
    "email": "email",
    "role": "role",
    "department": "department",
    "position": "position",
    "joinedDate": "joined_date",
    "phone": "phone",
    "address": "address",
    "profilePicture": "profile_picture",
    "emergencyContact": "emergency_contact",
    "salary": "salary",
}


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object, no DB access. Credentials live elsewhere and are
    never part of this representation.
    """

    id: str
    name: str
    email: str
    role: Role = Role.EMPLOYEE
    department: Optional[str] = None
    position: Optional[str] = None
    joined_date: Optional[date] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_picture: Optional[str] = None
    emergency_contact: Optional[str] = None
    salary: Optional[float] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "position": self.position,
            "joinedDate": format_date(self.joined_date),
            "phone": self.phone,
            "address": self.address,
            "profilePicture": self.profile_picture,
            "emergencyContact": self.emergency_contact,
            "salary": self.salary,
        }
