# src/taskdeck/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.errors import TaskError
from ..tasks.task_models import Priority
from ..tasks.task_service import SortMode
from .render import describe, render_stats, render_task_table

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Task errors (bad input, unknown id, already completed) become the reply;
        anything else propagates to the connector.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            return f"Rejected: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

ADD_USAGE = "Usage: /add <name> | <description> | <YYYY-MM-DD> [| High|Medium|Low]"
SKIPPED_REPLY = "Skipped a task that was already completed or removed."


def _one_id(args: list[str]) -> str | None:
    if len(args) != 1:
        return None
    return args[0].lstrip("#")


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    fields = [f.strip() for f in " ".join(args).split("|")]
    if len(fields) not in (3, 4):
        return ADD_USAGE

    name, description, due = fields[0], fields[1], fields[2]
    priority = fields[3] if len(fields) == 4 and fields[3] else Priority.MEDIUM

    task = state.service.create_task(name, description, due, priority)
    return f"Added {describe(task)}."


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _one_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task = state.service.complete_task(task_id)
    return f"Completed {describe(task)}."


def cmd_remove(state: AppState, args: list[str]) -> str:
    task_id = _one_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    task = state.service.delete_task(task_id)
    return f"Removed {describe(task)}."


def cmd_undo(state: AppState, args: list[str]) -> str:
    task = state.service.undo_last_added()
    if task is None:
        return "Nothing to undo."
    return f"Undid {describe(task)}."


def cmd_next(state: AppState, args: list[str]) -> str:
    if state.service.queue.is_empty():
        return "Nothing to process."
    task = state.service.process_next()
    if task is None:
        return SKIPPED_REPLY
    return f"Processed {describe(task)}."


def cmd_urgent(state: AppState, args: list[str]) -> str:
    if state.service.priority.is_empty():
        return "Nothing urgent to process."
    task = state.service.process_most_urgent()
    if task is None:
        return SKIPPED_REPLY
    return f"Processed {describe(task)}."


def cmd_list(state: AppState, args: list[str]) -> str:
    default = getattr(state.settings, "default_sort", SortMode.INSERTION)
    mode = SortMode.parse(args[0] if args else default)
    tasks = state.service.sort_view(mode)
    header = f"Active tasks ({mode} order):"
    return f"{header}\n{render_task_table(tasks)}\n{render_stats(state.service.stats())}"


def cmd_completed(state: AppState, args: list[str]) -> str:
    tasks = state.service.list_completed()
    return "Completed tasks:\n" + render_task_table(tasks, empty_text="No completed tasks.")


def cmd_stats(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    stats = state.service.stats()
    if emit and stats.total == 0:
        with contextlib.suppress(Exception):
            emit("No tasks yet. Use /add to create one.")
    return render_stats(stats)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add name | description | YYYY-MM-DD | priority.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.", aliases=["complete"])
registry.register("rm", cmd_remove, help_text="Remove a task entirely: /rm <id>.", aliases=["remove", "delete"])
registry.register("undo", cmd_undo, help_text="Remove the most recently added task.")
registry.register("next", cmd_next, help_text="Complete the oldest task in the queue.")
registry.register("urgent", cmd_urgent, help_text="Complete the most urgent task.")
registry.register(
    "list", cmd_list, help_text="Show active tasks: /list [insertion|priority].", aliases=["ls"]
)
registry.register("completed", cmd_completed, help_text="Show completed tasks.")
registry.register("stats", cmd_stats, help_text="Show task counters.")
