# tests/test_commands.py

from __future__ import annotations

from taskdeck.cli.commands import SKIPPED_REPLY, CommandRegistry, registry
from taskdeck.connectors.console_connector import run_console_loop
from taskdeck.tasks.errors import NotFound

from .fakes import ScriptedConsole


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_command_registry_turns_task_errors_into_replies(state) -> None:
    reg = CommandRegistry()

    def fails(state, args):
        raise NotFound(7)

    reg.register("x", fails, "x")
    assert reg.handle(state, "/x") == "Rejected: Task 7 not found"


def test_add_list_and_stats(state) -> None:
    reply = registry.handle(state, "/add Write report | quarterly numbers | 2024-05-20 | high")
    assert reply is not None and reply.startswith("Added #1 Write report")

    registry.handle(state, "/add Call bank | card | 2024-05-03 | low")
    registry.handle(state, "/add Fix bike | chain | 2024-05-04")

    listing = registry.handle(state, "/list priority") or ""
    lines = listing.splitlines()
    assert lines[0] == "Active tasks (priority order):"
    body = [ln for ln in lines if ln[:1].isdigit()]
    assert [ln.split()[0] for ln in body] == ["1", "3", "2"]
    assert lines[-1] == "Tasks: 3 | Completed: 0 | In Progress: 3"

    assert state.service.get_task(3).priority == "Medium"


def test_add_usage_and_validation(state) -> None:
    assert (registry.handle(state, "/add just a name") or "").startswith("Usage: /add")
    reply = registry.handle(state, "/add | desc | 2024-05-20 | High") or ""
    assert reply.startswith("Rejected:")
    assert "name is required" in reply
    assert state.service.count_active() == 0


def test_done_rm_undo_next_urgent(state) -> None:
    for line in (
        "/add A | a | 2024-05-10 | Low",
        "/add B | b | 2024-05-10 | High",
        "/add C | c | 2024-05-10 | Medium",
        "/add D | d | 2024-05-10 | Low",
    ):
        registry.handle(state, line)

    assert (registry.handle(state, "/undo") or "").startswith("Undid #4 D")
    assert (registry.handle(state, "/urgent") or "").startswith("Processed #2 B")
    assert (registry.handle(state, "/next") or "").startswith("Processed #1 A")
    assert (registry.handle(state, "/done #3") or "").startswith("Completed #3 C")
    assert registry.handle(state, "/done 3") == "Rejected: Task 3 is already completed"
    assert (registry.handle(state, "/rm 1") or "").startswith("Removed #1 A")
    assert registry.handle(state, "/delete 1") == "Rejected: Task 1 not found"
    assert registry.handle(state, "/done") == "Usage: /done <id>"

    assert registry.handle(state, "/stats") == "Tasks: 0 | Completed: 2 | In Progress: 0"
    completed = registry.handle(state, "/completed") or ""
    assert "B" in completed and "C" in completed

    assert registry.handle(state, "/undo") == "Undid #3 C [Medium, due 2024-05-10]."
    assert registry.handle(state, "/next") == SKIPPED_REPLY
    assert registry.handle(state, "/next") == "Nothing to process."


def test_list_empty_and_bad_mode(state) -> None:
    listing = registry.handle(state, "/ls") or ""
    assert "No tasks yet." in listing
    assert (registry.handle(state, "/list alphabetical") or "").startswith("Rejected:")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/done", "/rm", "/undo", "/next", "/urgent", "/list", "/completed", "/stats"):
        assert name in text


def test_console_loop_runs_commands_until_exit(state) -> None:
    console = ScriptedConsole(
        [
            "/add A | a | 2024-05-10 | High",
            "",
            "hello",
            "/stats",
            "/exit",
            "/add never | reached | 2024-05-10",
        ]
    )

    run_console_loop(state, read=console.read, write=console.write)

    assert "Added #1 A" in console.text
    assert "Commands start with '/'" in console.text
    assert "Tasks: 1 | Completed: 0 | In Progress: 1" in console.text
    assert state.service.count_active() == 1


def test_console_loop_stops_on_eof(state) -> None:
    console = ScriptedConsole(["/add A | a | 2024-05-10"])
    run_console_loop(state, read=console.read, write=console.write)
    assert state.service.count_active() == 1


def test_next_and_urgent_report_skipped_entries(state) -> None:
    registry.handle(state, "/add A | a | 2024-05-10 | High")
    registry.handle(state, "/add B | b | 2024-05-10 | Low")
    registry.handle(state, "/done 1")

    assert registry.handle(state, "/next") == SKIPPED_REPLY
    assert registry.handle(state, "/urgent") == SKIPPED_REPLY
    assert state.service.count_active() == 1

    assert (registry.handle(state, "/next") or "").startswith("Processed #2 B")
    assert registry.handle(state, "/next") == "Nothing to process."
    assert registry.handle(state, "/urgent") == SKIPPED_REPLY
    assert registry.handle(state, "/urgent") == "Nothing urgent to process."
