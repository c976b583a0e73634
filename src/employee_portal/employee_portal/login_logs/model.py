from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..common.datetime_utils import format_timestamp
from ..core.enums import LoginAction


@dataclass(frozen=True)
class LoginLog:
    """Append-only record of a login or logout."""

    id: str
    employee_id: str
    action: LoginAction
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "action": self.action.value,
            "timestamp": format_timestamp(self.timestamp),
        }
