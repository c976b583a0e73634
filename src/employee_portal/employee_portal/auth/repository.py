from __future__ import annotations

from typing import Optional, Protocol


class CredentialRepository(Protocol):
    """Password hashes, kept apart from the employee representation."""

    def get_password_hash(self, employee_id: str) -> Optional[str]:
        raise NotImplementedError
