from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .api_client import ApiClient, ApiError
from .store import ResourceCache

logger = logging.getLogger(__name__)


class PortalSession:
    """One signed-in user's view of the portal.

    Role checks happen here, before any admin-only call; the API itself does
    not authorize requests.
    """

    def __init__(self, api: ApiClient):
        self._api = api
        self.user: Optional[Dict[str, Any]] = None
        self.employees = ResourceCache(api, "/api/employees")
        self.tasks = ResourceCache(api, "/api/tasks")
        self.attendance = ResourceCache(api, "/api/attendance")
        self.leaves = ResourceCache(api, "/api/leave-requests")

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return bool(self.user) and self.user.get("role") == Role.ADMIN.value

    def require_admin(self) -> None:
        if not self.is_admin:
            raise AuthorizationError("Admin privileges required")

    def _require_user(self) -> Dict[str, Any]:
        if self.user is None:
            raise AuthorizationError("Not signed in")
        return self.user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        self.user = self._api.post("/api/auth/login", {"email": email, "password": password})
        logger.info("Signed in as %s (%s)", self.user.get("email"), self.user.get("role"))
        return self.user

    def logout(self) -> None:
        if self.user is None:
            return
        try:
            self._api.post("/api/auth/logout", {"employeeId": self.user["id"]})
        finally:
            self.user = None

    def refresh_all(self) -> None:
        for cache in (self.employees, self.tasks, self.attendance, self.leaves):
            cache.refresh()

    # employees (admin only)

    def add_employee(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        self.require_admin()
        return self.employees.create(body)

    def update_employee(self, employee_id: str, changes: Mapping[str, Any]) -> None:
        self.require_admin()
        self.employees.update(employee_id, changes)

    def delete_employee(self, employee_id: str) -> None:
        self.require_admin()
        self.employees.delete(employee_id)

    # attendance

    def clock_in(self) -> Dict[str, Any]:
        user = self._require_user()
        record = self._api.post("/api/attendance/clock-in", {"employeeId": user["id"]})
        self.attendance.refresh()
        return record

    def clock_out(self) -> Dict[str, Any]:
        user = self._require_user()
        record = self._api.post("/api/attendance/clock-out", {"employeeId": user["id"]})
        self.attendance.refresh()
        return record

    # leave

    def apply_for_leave(self, *, start_date: str, end_date: str, leave_type: str, reason: str) -> Dict[str, Any]:
        user = self._require_user()
        return self.leaves.create(
            {"employeeId": user["id"], "startDate": start_date, "endDate": end_date, "type": leave_type, "reason": reason}
        )

    def approve_leave(self, request_id: str, comments: Optional[str] = None) -> None:
        self._review_leave(request_id, "approve", comments)

    def reject_leave(self, request_id: str, comments: Optional[str] = None) -> None:
        self._review_leave(request_id, "reject", comments)

    def _review_leave(self, request_id: str, action: str, comments: Optional[str]) -> None:
        """Send the cached version; on 409 re-fetch so a retry uses the fresh one."""

        self.require_admin()
        if not self.leaves.loaded:
            self.leaves.refresh()
        cached = self.leaves.get(request_id)
        if cached is None:
            raise NotFoundError("Leave request not found")

        body: Dict[str, Any] = {"adminId": self.user["id"], "version": cached.get("version", 0)}
        if comments:
            body["comments"] = comments
        try:
            self._api.put(f"/api/leave-requests/{request_id}/{action}", body)
        except ApiError as e:
            if e.is_conflict:
                logger.warning("Leave %s changed on the server (now version %s); refreshing", request_id, e.current_version)
                self.leaves.refresh()
            raise
        self.leaves.refresh()

    # login logs (admin only)

    def login_logs(self, employee_id: Optional[str] = None):
        self.require_admin()
        return self._api.get("/api/login-logs", employeeId=employee_id)
