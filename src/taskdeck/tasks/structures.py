# src/taskdeck/tasks/structures.py

"""
Ordering structures over the task registry.

All three hold task ids only (non-owning references). The registry owns task
lifetime; ids are resolved against it by the service on read.

- TaskStack: last-in-first-out, drives "undo last addition"
- TaskQueue: first-in-first-out, drives "process next"
- PriorityCollection: binary heap keyed by (priority rank, insertion sequence),
  drives "process most urgent"; equal ranks come out in insertion order
"""

from __future__ import annotations

import heapq
import itertools
from collections import deque

from .errors import Empty
from .task_models import Task


class TaskStack:
    def __init__(self) -> None:
        self._items: list[int] = []

    def push(self, task: Task) -> None:
        self._items.append(task.id)

    def pop(self) -> int:
        if not self._items:
            raise Empty("stack is empty")
        return self._items.pop()

    def peek(self) -> int:
        if not self._items:
            raise Empty("stack is empty")
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def remove(self, task_id: int) -> bool:
        before = len(self._items)
        self._items = [i for i in self._items if i != task_id]
        return len(self._items) != before

    def ids(self) -> list[int]:
        """Bottom to top, i.e. insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._items


class TaskQueue:
    def __init__(self) -> None:
        self._items: deque[int] = deque()

    def enqueue(self, task: Task) -> None:
        self._items.append(task.id)

    def dequeue(self) -> int:
        if not self._items:
            raise Empty("queue is empty")
        return self._items.popleft()

    def peek(self) -> int:
        if not self._items:
            raise Empty("queue is empty")
        return self._items[0]

    front = peek

    def is_empty(self) -> bool:
        return not self._items

    def remove(self, task_id: int) -> bool:
        before = len(self._items)
        self._items = deque(i for i in self._items if i != task_id)
        return len(self._items) != before

    def ids(self) -> list[int]:
        """Front to back."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._items


class PriorityCollection:
    """
    Min-heap of (rank, seq, task_id).

    `seq` is a monotonically increasing insertion counter, so two tasks with
    the same rank are ordered by insertion and the tuple never compares ids.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, int]] = []
        self._seq = itertools.count()

    def insert(self, task: Task) -> None:
        heapq.heappush(self._heap, (task.priority.rank, next(self._seq), task.id))

    def extract_min(self) -> int:
        if not self._heap:
            raise Empty("priority collection is empty")
        _, _, task_id = heapq.heappop(self._heap)
        return task_id

    def peek(self) -> int:
        if not self._heap:
            raise Empty("priority collection is empty")
        return self._heap[0][2]

    def is_empty(self) -> bool:
        return not self._heap

    def remove(self, task_id: int) -> bool:
        kept = [entry for entry in self._heap if entry[2] != task_id]
        if len(kept) == len(self._heap):
            return False
        heapq.heapify(kept)
        self._heap = kept
        return True

    def ids(self) -> list[int]:
        """Extraction order, without extracting."""
        return [task_id for _, _, task_id in sorted(self._heap)]

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, task_id: object) -> bool:
        return any(entry[2] == task_id for entry in self._heap)
