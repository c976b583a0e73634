from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..common.datetime_utils import format_date
from ..core.constants import INITIAL_LEAVE_VERSION
from ..core.enums import LeaveStatus, LeaveType

LEAVE_CREATE_FIELDS = ("employeeId", "startDate", "endDate", "type", "reason")


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave request and its review state.

    ``version`` grows by exactly one per successful review; clients echo it
    back on approve/reject so concurrent reviews are detected.
    """

    id: str
    employee_id: str
    start_date: date
    end_date: date
    type: LeaveType
    reason: str
    status: LeaveStatus
    applied_date: date
    reviewed_by: Optional[str] = None
    review_date: Optional[date] = None
    comments: Optional[str] = None
    version: int = INITIAL_LEAVE_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "startDate": format_date(self.start_date),
            "endDate": format_date(self.end_date),
            "type": self.type.value,
            "reason": self.reason,
            "status": self.status.value,
            "appliedDate": format_date(self.applied_date),
            "reviewedBy": self.reviewed_by,
            "reviewDate": format_date(self.review_date),
            "comments": self.comments,
            "version": self.version,
        }
