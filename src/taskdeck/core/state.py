# src/taskdeck/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..tasks.task_service import TaskService


@dataclass
class AppState:
    # Settings object (config.Settings in the app, SimpleNamespace in tests).
    settings: object

    service: TaskService

    # Serializes command handling when more than one connector drives the service.
    lock: threading.Lock | None = field(default_factory=threading.Lock)
