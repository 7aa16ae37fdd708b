# src/taskdeck/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from .errors import InvalidInput


class Priority(StrEnum):
    """
    Task priority.

    Rank defines the fixed total order used by the priority collection:
    High (1) < Medium (2) < Low (3).
    """

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: Priority | str | None) -> Priority:
        if isinstance(raw, cls):
            return raw
        if not raw or not str(raw).strip():
            raise InvalidInput("priority is required")
        key = str(raw).strip().lower()
        for p in cls:
            if p.value.lower() == key:
                return p
        raise InvalidInput(f"unknown priority: {raw!r} (expected High, Medium or Low)")


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class TaskState(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DELETED = "deleted"  # terminal: the id is gone from the registry


@dataclass(slots=True, eq=False)
class Task:
    id: int
    name: str
    description: str
    added_date: date
    due_date: date
    priority: Priority

    completed: bool = False

    @property
    def state(self) -> TaskState:
        return TaskState.COMPLETED if self.completed else TaskState.ACTIVE

    def mark_completed(self) -> bool:
        """Flip `completed` to True. Returns False if it already was (no un-completing)."""
        if self.completed:
            return False
        self.completed = True
        return True


class TaskEventKind(StrEnum):
    CREATED = "created"
    COMPLETED = "completed"
    DELETED = "deleted"


@dataclass(slots=True, frozen=True)
class TaskEvent:
    """Change notification emitted by the service after each successful mutation."""

    kind: TaskEventKind
    task: Task
