from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.ids import new_id
from ..common.validators import is_blank, reject_unknown_fields, require_enum, require_fields, require_int
from ..core.constants import INITIAL_LEAVE_VERSION
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from .model import LEAVE_CREATE_FIELDS, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Use cases: apply for leave, list requests, review (approve/reject).

    Reviews use optimistic locking: the caller sends the version it last saw,
    and a stale version (or an already-reviewed request) is a ConflictError
    carrying the current version. Nothing is retried here.
    """

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def list_requests(self, *, employee_id: Optional[str] = None, status: Optional[str] = None) -> Sequence[LeaveRequest]:
        status_filter = require_enum(status, LeaveStatus, "status") if not is_blank(status) else None
        return self._leaves.list_requests(employee_id=employee_id or None, status=status_filter)

    def get_request(self, request_id: str) -> LeaveRequest:
        leave = self._leaves.get_by_id(request_id)
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def apply(self, body: Mapping[str, Any]) -> LeaveRequest:
        require_fields(body, LEAVE_CREATE_FIELDS)
        reject_unknown_fields(body, LEAVE_CREATE_FIELDS)

        start_date = parse_iso_date(body["startDate"], "startDate")
        end_date = parse_iso_date(body["endDate"], "endDate")
        if end_date < start_date:
            raise ValidationError("endDate must be on or after startDate")

        leave = LeaveRequest(
            id=new_id(),
            employee_id=str(body["employeeId"]).strip(),
            start_date=start_date,
            end_date=end_date,
            type=require_enum(body["type"], LeaveType, "type"),
            reason=str(body["reason"]).strip(),
            status=LeaveStatus.PENDING,
            applied_date=today_local(),
            version=INITIAL_LEAVE_VERSION,
        )
        self._leaves.create(leave)
        logger.info("Leave request added with id=%s (employee=%s)", leave.id, leave.employee_id)
        return leave

    def approve(self, request_id: str, body: Mapping[str, Any]) -> None:
        self._review(request_id, LeaveStatus.APPROVED, body)

    def reject(self, request_id: str, body: Mapping[str, Any]) -> None:
        self._review(request_id, LeaveStatus.REJECTED, body)

    def _review(self, request_id: str, status: LeaveStatus, body: Mapping[str, Any]) -> None:
        if is_blank(body.get("adminId")):
            raise ValidationError("adminId is required")
        if body.get("version") is None:
            raise ValidationError("Version is required for optimistic locking")
        version = require_int(body["version"], "version", min_value=0)
        comments = body.get("comments")

        self._leaves.review(
            request_id=request_id,
            status=status,
            reviewed_by=str(body["adminId"]).strip(),
            review_date=today_local(),
            comments=None if is_blank(comments) else str(comments),
            expected_version=version,
        )
        logger.info("Leave request %s %s by %s (version %s -> %s)", request_id, status.value, body["adminId"], version, version + 1)
