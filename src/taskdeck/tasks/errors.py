# src/taskdeck/tasks/errors.py

"""
Error kinds raised by the task core.

Every error is either reported back as a rejected operation or swallowed by
internally driven operations (undo/process), never fatal.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for all task core errors."""


class InvalidInput(TaskError, ValueError):
    """A required field is missing or malformed."""


class NotFound(TaskError, LookupError):
    """No task with the given id exists in the registry."""

    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class Empty(TaskError, IndexError):
    """Pop/dequeue/extract on an empty ordering structure."""


class AlreadyCompleted(TaskError):
    """Completion requested for a task that is already done."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} is already completed")
        self.task_id = task_id
