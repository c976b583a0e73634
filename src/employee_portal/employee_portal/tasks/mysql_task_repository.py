from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import DanglingReferenceError, DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, employee_exists, fetchall, fetchone
from .model import TASK_COLUMNS, Task
from .repository import TaskRepository

_SELECT = """
    SELECT id, title, description, assigned_to, assigned_by, created_at,
           due_date, priority, status, notes, progress
    FROM tasks
"""


def _row_to_task(r: dict) -> Task:
    return Task(
        id=str(r["id"]),
        title=r["title"],
        description=r["description"],
        assigned_to=str(r["assigned_to"]),
        assigned_by=str(r["assigned_by"]),
        created_at=r["created_at"],
        due_date=r["due_date"],
        priority=TaskPriority(r["priority"]),
        status=TaskStatus(r["status"]),
        notes=r.get("notes"),
        progress=int(r.get("progress") or 0),
    )


def _check_assignees(cur, *, assigned_to: Optional[str], assigned_by: Optional[str]) -> None:
    if assigned_to is not None and not employee_exists(cur, assigned_to):
        raise DanglingReferenceError("AssignedTo employee does not exist")
    if assigned_by is not None and not employee_exists(cur, assigned_by):
        raise DanglingReferenceError("AssignedBy employee does not exist")


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY due_date, created_at")
            return [_row_to_task(r) for r in fetchall(cur)]

    def list_for_assignee(self, employee_id: str) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE assigned_to=%s ORDER BY due_date", (employee_id,))
            return [_row_to_task(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: str) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (task_id,))
            row = fetchone(cur)
            return _row_to_task(row) if row else None

    def create(self, task: Task) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                _check_assignees(cur, assigned_to=task.assigned_to, assigned_by=task.assigned_by)
                cur.execute(
                    """
                    INSERT INTO tasks(
                        id, title, description, assigned_to, assigned_by, created_at,
                        due_date, priority, status, notes, progress
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        task.id,
                        task.title,
                        task.description,
                        task.assigned_to,
                        task.assigned_by,
                        task.created_at,
                        task.due_date,
                        task.priority.value,
                        task.status.value,
                        task.notes,
                        int(task.progress),
                    ),
                )
        except DuplicateKeyError as e:
            raise DuplicateKeyError("Task ID already exists") from e

    def update_fields(self, task_id: str, changes: Mapping[str, Any]) -> bool:
        set_clause, values = build_set_clause(changes, TASK_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM tasks WHERE id=%s FOR UPDATE", (task_id,))
            if not fetchone(cur):
                return False
            _check_assignees(cur, assigned_to=changes.get("assignedTo"), assigned_by=changes.get("assignedBy"))
            cur.execute(f"UPDATE tasks SET {set_clause} WHERE id=%s", tuple(values + [task_id]))
            return cur.rowcount > 0

    def delete_by_id(self, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s", (task_id,))
            return cur.rowcount > 0
