from __future__ import annotations

import logging
from typing import Any

from werkzeug.security import check_password_hash

from ..common.validators import is_blank, require_non_empty
from ..core.enums import LoginAction
from ..core.exceptions import AuthenticationError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..login_logs.service import LoginLogService
from .repository import CredentialRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Use case: verify credentials and record login/logout events.

    No session or token is issued; the client keeps the returned employee.
    """

    def __init__(self, employees: EmployeeRepository, credentials: CredentialRepository, login_logs: LoginLogService):
        self._employees = employees
        self._credentials = credentials
        self._login_logs = login_logs

    def login(self, email: Any, password: Any) -> Employee:
        if is_blank(email) or is_blank(password):
            raise ValidationError("Email and password are required")

        employee = self._employees.get_by_email(str(email).strip())
        if not employee:
            raise AuthenticationError(INVALID_CREDENTIALS)

        password_hash = self._credentials.get_password_hash(employee.id)
        if not password_hash:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(password_hash, str(password))
        except ValueError:
            # unknown hash method, e.g. a placeholder value in seed data
            ok = False

        if not ok:
            logger.info("Failed login for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        self._login_logs.record(employee.id, LoginAction.LOGIN.value)
        return employee

    def logout(self, employee_id: Any) -> None:
        employee_id = require_non_empty(employee_id, "employeeId")
        self._login_logs.record(employee_id, LoginAction.LOGOUT.value)
