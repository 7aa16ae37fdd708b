# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdeck.core.state import AppState
from taskdeck.tasks.task_service import TaskService

from .fakes import FixedClock, RecordingListener


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdeck-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path / "data",
        default_sort="insertion",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture()
def service(clock: FixedClock, listener: RecordingListener) -> TaskService:
    svc = TaskService(clock=clock)
    svc.subscribe(listener)
    return svc


@pytest.fixture()
def state(settings: SimpleNamespace, service: TaskService) -> AppState:
    return AppState(settings=settings, service=service)
