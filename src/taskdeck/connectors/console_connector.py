# src/taskdeck/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.render import describe
from ..core.state import AppState
from ..tasks.task_models import TaskEvent

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def run_console_loop(
    state: AppState,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    """
    Interactive REPL over the slash-command registry.

    `read`/`write` are injectable so the loop can be driven without a terminal.
    """
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskdeck"))
    write(f"[{_ts_local()}] [{app_name}] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        write(f"[{_ts_local()}] {text}")

    def on_change(event: TaskEvent) -> None:
        logger.debug("Console saw %s %s", event.kind, describe(event.task))

    unsubscribe = state.service.subscribe(on_change)
    lock = state.lock

    try:
        while True:
            try:
                user_input = read(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                write("")
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                if lock:
                    with lock:
                        response = command_registry.handle(state, user_input, emit=emit)
                else:
                    response = command_registry.handle(state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is None:
                response = "Commands start with '/'. Use /help to list available commands."

            write(f"[{_ts_local()}] {response}")
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
