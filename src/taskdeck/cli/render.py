# src/taskdeck/cli/render.py

"""Plain-text rendering of task tables and stats for the console connector."""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Task
from ..tasks.task_service import TaskStats

COLUMNS: tuple[str, ...] = ("ID", "Name", "Description", "Added", "Due", "Priority")
MAX_CELL = 32
SEP = " | "


def _clip(text: str, width: int = MAX_CELL) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def _row(task: Task) -> tuple[str, ...]:
    return (
        str(task.id),
        _clip(task.name),
        _clip(task.description),
        task.added_date.isoformat(),
        task.due_date.isoformat(),
        str(task.priority),
    )


def render_task_table(tasks: Sequence[Task], *, empty_text: str = "No tasks yet.") -> str:
    if not tasks:
        return empty_text

    rows = [_row(t) for t in tasks]
    widths = [len(c) for c in COLUMNS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def fmt(cells: Sequence[str]) -> str:
        return SEP.join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    lines = [fmt(COLUMNS), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt(r) for r in rows)
    return "\n".join(lines)


def render_stats(stats: TaskStats) -> str:
    # "Tasks" and "In Progress" both count active tasks.
    return f"Tasks: {stats.active} | Completed: {stats.completed} | In Progress: {stats.active}"


def describe(task: Task) -> str:
    return f"#{task.id} {task.name} [{task.priority}, due {task.due_date.isoformat()}]"
