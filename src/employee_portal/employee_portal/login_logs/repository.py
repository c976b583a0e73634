from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LoginLog


class LoginLogRepository(Protocol):
    def list_logs(self, employee_id: Optional[str] = None) -> Sequence[LoginLog]:
        """Newest first."""

        raise NotImplementedError

    def append(self, log: LoginLog) -> None:
        """Raises DanglingReferenceError when the employee does not exist."""

        raise NotImplementedError
