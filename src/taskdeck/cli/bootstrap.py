# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the task service into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_service import TaskService

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if getattr(settings, "log_to_file", False):
        _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        service=TaskService(clock=clock),
    )
    logger.debug("AppState ready app=%s", getattr(settings, "app_name", "taskdeck"))
    return state
