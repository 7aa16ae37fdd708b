# src/taskdeck/tasks/task_service.py

from __future__ import annotations

"""
Task service.

Orchestrates the registry and the three ordering structures:
- create / complete / delete tasks,
- undo the last addition (stack),
- process the oldest task (queue) or the most urgent one (priority collection),
- produce display orderings without touching the registry order.

Every registry mutation is mirrored into all three structures before the call
returns, then listeners are notified.
"""

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from ..core.ports import Clock, TaskListener
from .errors import AlreadyCompleted, Empty, InvalidInput, NotFound
from .structures import PriorityCollection, TaskQueue, TaskStack
from .task_models import Priority, Task, TaskEvent, TaskEventKind
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)


class SortMode(StrEnum):
    INSERTION = "insertion"
    PRIORITY = "priority"

    @classmethod
    def parse(cls, raw: SortMode | str) -> SortMode:
        if isinstance(raw, cls):
            return raw
        key = str(raw or "").strip().lower()
        if key in ("insertion", "insertion_order", "stack", "added"):
            return cls.INSERTION
        if key in ("priority", "priority_order", "urgent"):
            return cls.PRIORITY
        raise InvalidInput(f"unknown sort mode: {raw!r} (expected insertion or priority)")


@dataclass(slots=True, frozen=True)
class TaskStats:
    active: int
    completed: int

    @property
    def total(self) -> int:
        return self.active + self.completed


def _require_text(value: str | None, field: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise InvalidInput(f"{field} is required")
    return text


def _parse_due_date(raw: date | str | None) -> date:
    # datetime is a date subclass; keep date precision only
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = "" if raw is None else str(raw).strip()
    if not text:
        raise InvalidInput("due date is required")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidInput(f"invalid due date: {text!r} (expected YYYY-MM-DD)") from None


def _coerce_id(raw: int | str) -> int:
    """Ids arrive as ints or decimal strings; anything else cannot name a task."""
    if isinstance(raw, bool):
        raise NotFound(raw)
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text.isdecimal():
        raise NotFound(raw)
    return int(text)


class TaskService:
    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or date.today
        self._ids = itertools.count(1)

        self.registry = TaskRegistry()
        self.stack = TaskStack()
        self.queue = TaskQueue()
        self.priority = PriorityCollection()

        self._listeners: list[TaskListener] = []

    # ---- change notification ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, kind: TaskEventKind, task: Task) -> None:
        event = TaskEvent(kind=kind, task=task)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Task listener failed kind=%s task_id=%s", kind, task.id)

    # ---- commands ----

    def create_task(
        self,
        name: str,
        description: str,
        due_date: date | str | None,
        priority: Priority | str = Priority.MEDIUM,
    ) -> Task:
        name = _require_text(name, "name")
        description = _require_text(description, "description")
        due = _parse_due_date(due_date)
        prio = Priority.parse(priority)

        today = self._clock()
        if due < today:
            raise InvalidInput(f"due date {due.isoformat()} is before today ({today.isoformat()})")

        task = Task(
            id=next(self._ids),
            name=name,
            description=description,
            added_date=today,
            due_date=due,
            priority=prio,
        )

        self.registry.add(task)
        self.stack.push(task)
        self.queue.enqueue(task)
        self.priority.insert(task)

        logger.info("Task created id=%s priority=%s due=%s", task.id, prio, due)
        self._emit(TaskEventKind.CREATED, task)
        return task

    def complete_task(self, task_id: int | str) -> Task:
        task = self.registry.find(_coerce_id(task_id))
        if not task.mark_completed():
            raise AlreadyCompleted(task.id)

        logger.info("Task completed id=%s", task.id)
        self._emit(TaskEventKind.COMPLETED, task)
        return task

    def delete_task(self, task_id: int | str) -> Task:
        task = self.registry.remove_by_id(_coerce_id(task_id))
        self.stack.remove(task.id)
        self.queue.remove(task.id)
        self.priority.remove(task.id)

        logger.info("Task deleted id=%s was=%s", task.id, task.state)
        self._emit(TaskEventKind.DELETED, task)
        return task

    def undo_last_added(self) -> Task | None:
        """Delete (not complete) the most recently added task still on the stack."""
        try:
            task_id = self.stack.pop()
        except Empty:
            return None
        try:
            return self.delete_task(task_id)
        except NotFound:
            logger.debug("Undo skipped stale task id=%s", task_id)
            return None

    def process_next(self) -> Task | None:
        """Complete the oldest task on the queue."""
        try:
            task_id = self.queue.dequeue()
        except Empty:
            return None
        return self._process(task_id, source="queue")

    def process_most_urgent(self) -> Task | None:
        """Complete the highest-priority task (oldest first among equal priorities)."""
        try:
            task_id = self.priority.extract_min()
        except Empty:
            return None
        return self._process(task_id, source="priority")

    def _process(self, task_id: int, *, source: str) -> Task | None:
        try:
            return self.complete_task(task_id)
        except (NotFound, AlreadyCompleted) as e:
            # The structures may lag the registry; processing a stale entry is a no-op.
            logger.debug("Process from %s skipped task id=%s: %s", source, task_id, e)
            return None

    # ---- queries ----

    def get_task(self, task_id: int | str) -> Task:
        return self.registry.find(_coerce_id(task_id))

    def list_active(self) -> list[Task]:
        return self.registry.list_active()

    def list_completed(self) -> list[Task]:
        return self.registry.list_completed()

    def count_active(self) -> int:
        return self.registry.count_active()

    def count_completed(self) -> int:
        return self.registry.count_completed()

    def stats(self) -> TaskStats:
        return TaskStats(active=self.count_active(), completed=self.count_completed())

    def sort_view(self, mode: SortMode | str = SortMode.INSERTION) -> list[Task]:
        """
        Active tasks in display order. Does not mutate the registry.

        - insertion: the stack's current order (bottom to top)
        - priority: the priority collection's extraction order
        """
        mode = SortMode.parse(mode)
        ids = self.stack.ids() if mode is SortMode.INSERTION else self.priority.ids()

        out: list[Task] = []
        for task_id in ids:
            task = self.registry.get(task_id)
            if task is not None and not task.completed:
                out.append(task)
        return out
