from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..common.datetime_utils import format_date
from ..core.enums import TaskPriority, TaskStatus

# Wire field -> column; the allow-list for partial updates.
TASK_COLUMNS: Dict[str, str] = {
    "title": "title",
    "description": "description",
    "assignedTo": "assigned_to",
    "assignedBy": "assigned_by",
    "dueDate": "due_date",
    "priority": "priority",
    "status": "status",
    "notes": "notes",
    "progress": "progress",
}


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str
    assigned_to: str
    assigned_by: str
    created_at: date
    due_date: date
    priority: TaskPriority
    status: TaskStatus
    notes: Optional[str] = None
    progress: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "assignedTo": self.assigned_to,
            "assignedBy": self.assigned_by,
            "createdAt": format_date(self.created_at),
            "dueDate": format_date(self.due_date),
            "priority": self.priority.value,
            "status": self.status.value,
            "notes": self.notes,
            "progress": self.progress,
        }
