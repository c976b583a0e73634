from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(self, leave: LeaveRequest) -> None:
        """Raises DanglingReferenceError when the employee does not exist."""

        raise NotImplementedError

    def review(
        self,
        *,
        request_id: str,
        status: LeaveStatus,
        reviewed_by: str,
        review_date: date,
        comments: Optional[str],
        expected_version: int,
    ) -> None:
        """Move a pending request to ``status`` if its version still matches.

        All steps run in one transaction:
        - ReviewerNotFoundError if ``reviewed_by`` is not an employee
        - conditional write (id, version, still pending), bumping version by 1
        - on zero rows: NotFoundError if the id is unknown, otherwise
          ConflictError carrying the row's current version
        """

        raise NotImplementedError
