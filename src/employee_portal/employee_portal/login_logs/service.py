from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import is_blank
from ..core.enums import LoginAction
from ..core.exceptions import ValidationError
from .model import LoginLog
from .repository import LoginLogRepository

logger = logging.getLogger(__name__)


class LoginLogService:
    def __init__(self, logs: LoginLogRepository):
        self._logs = logs

    def list_logs(self, employee_id: Optional[str] = None) -> Sequence[LoginLog]:
        return self._logs.list_logs(employee_id or None)

    def record(self, employee_id: Any, action: Any, *, now: Optional[datetime] = None) -> LoginLog:
        if is_blank(employee_id) or is_blank(action):
            raise ValidationError("employeeId and action are required")
        try:
            login_action = LoginAction(action)
        except ValueError:
            raise ValidationError('Action must be "login" or "logout"')

        log = LoginLog(
            id=new_id(),
            employee_id=str(employee_id).strip(),
            action=login_action,
            timestamp=(now or now_local()).replace(microsecond=0),
        )
        self._logs.append(log)
        logger.info("Login log added with id=%s (%s %s)", log.id, log.employee_id, log.action.value)
        return log
