# src/afazo/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.view import TaskListView
from ..errors import ViewNotReady
from ..tasks.task_gateway import MutationResult

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[TaskListView, str], str | Awaitable[str]]
CommandHandler3 = Callable[[TaskListView, str, CommandEmitter | None], str | Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

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

    async def handle(
        self,
        view: TaskListView,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command rest of line".
        Returns a reply string or None if not a command.

        Handlers get the raw remainder of the line (task text is not normalized).
        """
        if not line.startswith("/"):
            return None

        name, _, arg = line[1:].partition(" ")
        name = name.lower()
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                out = cast(CommandHandler3, handler)(view, arg, emit)
            else:
                out = cast(CommandHandler2, handler)(view, arg)
            if inspect.isawaitable(out):
                out = await out
        except ViewNotReady:
            return "Still loading, try again in a moment."
        return cast(str, out)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (empty line) - scroll down / load more")
        return "\n".join(lines)


registry = CommandRegistry()

# Mutations run in the background so the prompt stays usable meanwhile.
_jobs: set[asyncio.Task[None]] = set()


def describe_result(result: MutationResult | None) -> str:
    if result is None:
        return "Nothing to confirm."
    if result.skipped:
        return f"{result.action.value}: nothing to do."
    if result.ok:
        return f"{result.action.value}: done."
    return f"{result.action.value} failed: {result.error}"


def run_in_background(
    coro: Awaitable[MutationResult | None],
    emit: CommandEmitter | None,
) -> asyncio.Task[None]:
    """
    Start a mutation chain without waiting for it.

    When it finishes, its outcome is emitted.
    """
    async def _runner() -> None:
        try:
            result = await coro
        except Exception:
            logger.exception("Background command crashed.")
            if emit is not None:
                emit("Internal error while talking to the task store.")
            return
        if emit is not None:
            emit(describe_result(result))

    job = asyncio.create_task(_runner())
    _jobs.add(job)
    job.add_done_callback(_jobs.discard)
    return job


async def drain_background() -> None:
    """Wait for every in-flight mutation (used on exit and in tests)."""
    while _jobs:
        await asyncio.gather(*list(_jobs), return_exceptions=True)


def _parse_id(arg: str) -> int | None:
    try:
        return int(arg.strip().lstrip("#"))
    except ValueError:
        return None


def cmd_help(view: TaskListView, arg: str) -> str:
    return registry.build_help()


def cmd_add(view: TaskListView, arg: str, emit: CommandEmitter | None = None) -> str:
    view.set_text(arg)
    if not arg.strip():
        # Silent no-op, same as an empty input field.
        return ""
    run_in_background(view.create(), emit)
    return "Adding..."


def cmd_toggle(view: TaskListView, arg: str, emit: CommandEmitter | None = None) -> str:
    task_id = _parse_id(arg)
    if task_id is None:
        return "Usage: /toggle <id>"
    run_in_background(view.toggle(task_id), emit)
    return f"Toggling #{task_id}..."


def cmd_delete(view: TaskListView, arg: str) -> str:
    task_id = _parse_id(arg)
    if task_id is None:
        return "Usage: /del <id>"
    try:
        task = view.request_delete(task_id)
    except KeyError:
        return f"No task #{task_id} in the current list."
    return f'Delete this task? "{task.text}"  /yes to confirm, /no to cancel.'


def cmd_yes(view: TaskListView, arg: str, emit: CommandEmitter | None = None) -> str:
    staged = view.gate.staged
    if staged is None:
        return "Nothing to confirm."
    run_in_background(view.confirm_delete(), emit)
    return f"Deleting #{staged.id}..."


def cmd_no(view: TaskListView, arg: str) -> str:
    if view.gate.staged is None:
        return "Nothing to cancel."
    view.cancel_delete()
    return "Cancelled."


def cmd_search(view: TaskListView, arg: str) -> str:
    view.set_search(arg)
    return f'Search: "{arg}"' if arg else "Search cleared."


def cmd_filter(view: TaskListView, arg: str) -> str:
    try:
        view.set_filter(arg)
    except ValueError:
        return "Usage: /filter all | pending | done"
    return f"Filter: {view.state.filter.value}"


def cmd_next(view: TaskListView, arg: str) -> str:
    return "" if view.next_page() else "No more tasks."


def cmd_prev(view: TaskListView, arg: str) -> str:
    return "" if view.previous_page() else "Already on the first page."


def cmd_theme(view: TaskListView, arg: str) -> str:
    """
    /theme         -> flip light/dark
    /theme light   -> light
    /theme dark    -> dark
    """
    choice = arg.strip().lower()
    if not choice:
        mode = view.toggle_theme()
    elif choice in ("light", "dark"):
        mode = view.toggle_theme(choice == "dark")
    else:
        return "Usage: /theme [light|dark]"
    return f"Theme: {mode.value}"


async def cmd_refresh(view: TaskListView, arg: str) -> str:
    return describe_result(await view.refresh())


def cmd_list(view: TaskListView, arg: str) -> str:
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register("toggle", cmd_toggle, help_text="Mark a task done/pending: /toggle <id>.", aliases=["t"])
registry.register("del", cmd_delete, help_text="Ask to delete a task: /del <id>.", aliases=["rm"])
registry.register("yes", cmd_yes, help_text="Confirm the pending deletion.", aliases=["y"])
registry.register("no", cmd_no, help_text="Cancel the pending deletion.", aliases=["n"])
registry.register("search", cmd_search, help_text="Search task text: /search [text].", aliases=["s"])
registry.register("filter", cmd_filter, help_text="Filter: /filter all | pending | done.", aliases=["f"])
registry.register("next", cmd_next, help_text="Show the next page.")
registry.register("prev", cmd_prev, help_text="Show one page less.")
registry.register("theme", cmd_theme, help_text="Switch theme: /theme [light|dark].")
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the store.")
registry.register("list", cmd_list, help_text="Redraw the list.", aliases=["ls"])
