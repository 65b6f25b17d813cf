# src/afazo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import drain_background
from ..cli.commands import registry as command_registry
from ..core.ports import VisibilityCallback
from ..core.view import TaskListView
from .console_render import ConsoleStyleSink, render_view

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleVisibility:
    """
    Sentinel visibility for a terminal.

    The sentinel row is printed at the bottom of the list; pressing Enter on an
    empty line "scrolls" to it, which fires every live subscription.
    """

    def __init__(self) -> None:
        self._subs: dict[int, VisibilityCallback] = {}
        self._ids = itertools.count(1)

    @property
    def active(self) -> int:
        return len(self._subs)

    def subscribe(self, callback: VisibilityCallback) -> int:
        handle = next(self._ids)
        self._subs[handle] = callback
        return handle

    def unsubscribe(self, handle: int) -> None:
        self._subs.pop(handle, None)

    def scroll(self) -> int:
        fired = 0
        for cb in list(self._subs.values()):
            cb()
            fired += 1
        return fired


async def _read_line(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


async def run_console_loop(
    view: TaskListView,
    visibility: ConsoleVisibility,
    style: ConsoleStyleSink,
    *,
    read_line: Callable[[str], Awaitable[str]] | None = None,
) -> None:
    logger.info("Console connector started.")
    print(f"[{_ts_local()}] [CONSOLE] Use /help for commands, Enter to scroll, /exit to quit.\n")

    reader = read_line or _read_line

    def redraw() -> None:
        print(render_view(view.render(), style), flush=True)

    def emit(text: str) -> None:
        # Background mutation finished: report, then show the fresh list.
        print(f"\n[{_ts_local()}] {text}", flush=True)
        redraw()

    print(render_view(view.render(), style))
    start = await view.start()
    if not start.ok:
        print(f"[{_ts_local()}] Could not load tasks: {start.error}")
    redraw()

    try:
        while True:
            try:
                user_input = (await reader("> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                if visibility.scroll():
                    redraw()
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                reply = await command_registry.handle(view, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is None:
                reply = "Commands start with '/'. Use /help."
            if reply:
                print(f"[{_ts_local()}] {reply}")
            redraw()
    finally:
        await drain_background()
        view.close()
        logger.info("Console connector finished.")
