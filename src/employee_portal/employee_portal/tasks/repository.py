from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Task


class TaskRepository(Protocol):
    def list_all(self) -> Sequence[Task]:
        raise NotImplementedError

    def list_for_assignee(self, employee_id: str) -> Sequence[Task]:
        raise NotImplementedError

    def get_by_id(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def create(self, task: Task) -> None:
        """Insert after checking assignedTo/assignedBy exist, in one transaction.

        Raises DanglingReferenceError when either employee is missing.
        """

        raise NotImplementedError

    def update_fields(self, task_id: str, changes: Mapping[str, Any]) -> bool:
        """Same reference checks as ``create`` for any assignee keys present."""

        raise NotImplementedError

    def delete_by_id(self, task_id: str) -> bool:
        raise NotImplementedError
