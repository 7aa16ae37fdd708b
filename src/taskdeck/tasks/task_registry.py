# src/taskdeck/tasks/task_registry.py

from __future__ import annotations

import logging
from collections.abc import Iterator

from .errors import NotFound
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskRegistry:
    """
    In-memory, insertion-ordered owner of every known task (active and completed).

    The ordering structures only reference ids; a task leaves the process when it
    leaves the registry.
    """

    def __init__(self) -> None:
        # dicts keep insertion order, which is the canonical registry order
        self._tasks: dict[int, Task] = {}

    def add(self, task: Task) -> None:
        if task.id in self._tasks:
            raise ValueError(f"duplicate task id {task.id}")
        self._tasks[task.id] = task
        logger.debug("Registry add id=%s total=%d", task.id, len(self._tasks))

    def remove_by_id(self, task_id: int) -> Task:
        try:
            task = self._tasks.pop(task_id)
        except KeyError:
            raise NotFound(task_id) from None
        logger.debug("Registry remove id=%s total=%d", task_id, len(self._tasks))
        return task

    def find(self, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFound(task_id)
        return task

    def get(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)

    def list_all(self) -> list[Task]:
        return list(self._tasks.values())

    def list_active(self) -> list[Task]:
        return [t for t in self._tasks.values() if not t.completed]

    def list_completed(self) -> list[Task]:
        return [t for t in self._tasks.values() if t.completed]

    def count_active(self) -> int:
        return sum(1 for t in self._tasks.values() if not t.completed)

    def count_completed(self) -> int:
        return sum(1 for t in self._tasks.values() if t.completed)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list_all())

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
