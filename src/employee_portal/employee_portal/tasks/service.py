from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.ids import new_id
from ..common.validators import (
    is_blank,
    reject_unknown_fields,
    require_enum,
    require_fields,
    require_int,
    require_non_empty,
)
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import TASK_COLUMNS, Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)

REQUIRED_TASK_FIELDS = ("title", "description", "assignedTo", "assignedBy", "dueDate", "priority", "status")


def _clean_field(field: str, value: Any) -> Any:
    if field in ("title", "description", "assignedTo", "assignedBy"):
        return require_non_empty(value, field)
    if field == "dueDate":
        return parse_iso_date(value, "dueDate")
    if field == "priority":
        return require_enum(value, TaskPriority, "priority")
    if field == "status":
        return require_enum(value, TaskStatus, "status")
    if field == "notes":
        return None if is_blank(value) else str(value)
    if field == "progress":
        return 0 if value is None else require_int(value, "progress", min_value=0, max_value=100)
    raise ValidationError(f"Unrecognized field: {field}")


class TaskService:
    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    def list_tasks(self) -> Sequence[Task]:
        return self._tasks.list_all()

    def list_for_employee(self, employee_id: str) -> Sequence[Task]:
        return self._tasks.list_for_assignee(employee_id)

    def get_task(self, task_id: str) -> Task:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create_task(self, body: Mapping[str, Any]) -> Task:
        require_fields(body, REQUIRED_TASK_FIELDS)
        reject_unknown_fields(body, TASK_COLUMNS)
        cleaned = {field: _clean_field(field, value) for field, value in body.items()}

        task = Task(
            id=new_id(),
            title=cleaned["title"],
            description=cleaned["description"],
            assigned_to=cleaned["assignedTo"],
            assigned_by=cleaned["assignedBy"],
            created_at=today_local(),
            due_date=cleaned["dueDate"],
            priority=cleaned["priority"],
            status=cleaned["status"],
            notes=cleaned.get("notes"),
            progress=cleaned.get("progress", 0),
        )
        self._tasks.create(task)
        logger.info("Task added with id=%s (assignedTo=%s)", task.id, task.assigned_to)
        return task

    def update_task(self, task_id: str, body: Mapping[str, Any]) -> None:
        if not body:
            raise ValidationError("No fields to update")
        reject_unknown_fields(body, TASK_COLUMNS)

        changes = {field: _clean_field(field, value) for field, value in body.items()}
        if not self._tasks.update_fields(task_id, changes):
            raise NotFoundError("Task not found")
        logger.info("Task %s updated (%s)", task_id, ", ".join(sorted(changes)))

    def delete_task(self, task_id: str) -> None:
        if not self._tasks.delete_by_id(task_id):
            raise NotFoundError("Task not found")
        logger.info("Task %s deleted", task_id)
