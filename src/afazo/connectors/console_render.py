# src/afazo/connectors/console_render.py

from __future__ import annotations

import sys

from ..core.view import ViewModel
from ..tasks.task_models import TaskFilter

SENTINEL_ROW = "  ... (press Enter to load more)"

_FILTER_LABELS = {
    TaskFilter.ALL: "all",
    TaskFilter.PENDING: "pending",
    TaskFilter.DONE: "done",
}

# Palette keyed by the root style class.
_PALETTES = {
    "light": {"done": "\033[2m", "accent": "\033[34m", "error": "\033[31m"},
    "dark": {"done": "\033[90m", "accent": "\033[96m", "error": "\033[91m"},
}
_RESET = "\033[0m"


class ConsoleStyleSink:
    """Class list of the terminal "document root"; the renderer reads it."""

    def __init__(self, *, ansi: bool | None = None) -> None:
        self.classes: set[str] = set()
        self.ansi = sys.stdout.isatty() if ansi is None else ansi

    def set_class(self, name: str, enabled: bool) -> None:
        if enabled:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    def paint(self, text: str, role: str) -> str:
        if not self.ansi:
            return text
        palette = _PALETTES["dark" if "dark" in self.classes else "light"]
        return f"{palette[role]}{text}{_RESET}"


def render_view(vm: ViewModel, style: ConsoleStyleSink) -> str:
    if vm.loading:
        return "Loading..."

    lines: list[str] = []
    theme_hint = "/theme light" if vm.theme == "dark" else "/theme dark"
    lines.append(style.paint(f"Afazo  [{vm.theme}]  ({theme_hint})", "accent"))

    filters = " ".join(
        f"[{label}]" if f == vm.filter else label for f, label in _FILTER_LABELS.items()
    )
    search = f'search: "{vm.search}"' if vm.search else "search: -"
    lines.append(f"{search}   filter: {filters}")
    lines.append("")

    if not vm.visible:
        lines.append("  (no tasks)")
    for t in vm.visible:
        mark = "x" if t.completed else " "
        row = f"  [{mark}] #{t.id} {t.text}"
        lines.append(style.paint(row, "done") if t.completed else row)

    if vm.has_more:
        lines.append(SENTINEL_ROW)

    if vm.show_pager:
        prev_s = "/prev" if vm.can_go_back else "(prev)"
        next_s = "/next" if vm.has_more else "(next)"
        lines.append(f"  {prev_s}  page {vm.page}  {next_s}")

    if vm.staged is not None:
        lines.append("")
        lines.append(f'Delete this task? "{vm.staged.text}"   /yes  /no')

    if vm.error:
        lines.append(style.paint(f"[error] {vm.error}", "error"))

    return "\n".join(lines)
