# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task core.

The service depends on Protocols instead of concrete implementations,
so tests can swap in a fixed clock and a recording listener.
"""

from datetime import date
from typing import Protocol

from ..tasks.task_models import TaskEvent


class Clock(Protocol):
    """Returns today's date (date precision is all the core needs)."""
    def __call__(self) -> date: ...


class TaskListener(Protocol):
    """
    Presentation-side port: gets told about every mutation so it can re-render.
    Called after the registry and all ordering structures are consistent again.
    """
    def __call__(self, event: TaskEvent) -> None: ...
