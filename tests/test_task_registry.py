# tests/test_task_registry.py

from __future__ import annotations

from datetime import date

import pytest

from taskdeck.tasks.errors import NotFound
from taskdeck.tasks.task_models import Priority, Task, TaskState
from taskdeck.tasks.task_registry import TaskRegistry


def _task(task_id: int) -> Task:
    day = date(2024, 5, 1)
    return Task(
        id=task_id,
        name=f"t{task_id}",
        description="d",
        added_date=day,
        due_date=day,
        priority=Priority.LOW,
    )


def test_registry_add_find_remove() -> None:
    reg = TaskRegistry()
    a, b = _task(1), _task(2)
    reg.add(a)
    reg.add(b)

    assert reg.find(1) is a
    assert reg.get(3) is None
    assert 2 in reg
    assert len(reg) == 2

    assert reg.remove_by_id(1) is a
    assert 1 not in reg
    assert reg.list_all() == [b]

    with pytest.raises(NotFound):
        reg.remove_by_id(1)
    with pytest.raises(NotFound):
        reg.find(1)


def test_registry_rejects_duplicate_ids() -> None:
    reg = TaskRegistry()
    reg.add(_task(1))
    with pytest.raises(ValueError):
        reg.add(_task(1))


def test_registry_views_preserve_order_and_counts() -> None:
    reg = TaskRegistry()
    tasks = [_task(i) for i in (1, 2, 3, 4)]
    for t in tasks:
        reg.add(t)

    tasks[1].mark_completed()
    tasks[3].mark_completed()

    assert [t.id for t in reg.list_active()] == [1, 3]
    assert [t.id for t in reg.list_completed()] == [2, 4]
    assert reg.count_active() == 2
    assert reg.count_completed() == 2
    assert [t.id for t in reg] == [1, 2, 3, 4]


def test_task_completion_is_one_way() -> None:
    t = _task(1)
    assert t.state is TaskState.ACTIVE
    assert t.mark_completed() is True
    assert t.mark_completed() is False
    assert t.completed is True
    assert t.state is TaskState.COMPLETED


def test_priority_parse_and_rank() -> None:
    assert Priority.parse("high") is Priority.HIGH
    assert Priority.parse(" Medium ") is Priority.MEDIUM
    assert Priority.parse(Priority.LOW) is Priority.LOW
    assert Priority.HIGH.rank < Priority.MEDIUM.rank < Priority.LOW.rank
