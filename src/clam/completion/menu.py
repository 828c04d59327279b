"""Completion menu state and rendering."""

from __future__ import annotations

from collections.abc import Sequence

from rich.color import ColorSystem
from rich.style import Style

from clam.completion.types import Completion

DEFAULT_MAX_VISIBLE = 8
DEFAULT_VALUE_WIDTH = 25

SELECTED_STYLE = Style(reverse=True)
DESCRIPTION_STYLE = Style(dim=True)


def render_completion_item(
    completion: Completion,
    selected: bool,
    value_width: int = DEFAULT_VALUE_WIDTH,
    *,
    color_system: ColorSystem = ColorSystem.STANDARD,
) -> str:
    """One menu row: ``[marker][icon] value  description``."""

    icon = f"{completion.icon} " if completion.icon else "  "
    description = ""
    if completion.description:
        description = " " + DESCRIPTION_STYLE.render(completion.description, color_system=color_system)
    marker = "> " if selected else "  "
    line = f"{marker}{icon}{completion.label.ljust(value_width)}{description}"
    if selected:
        return SELECTED_STYLE.render(line, color_system=color_system)
    return line


def visible_window(total: int, selected_index: int, max_visible: int) -> tuple[int, int]:
    """Half-open ``(start, end)`` slice of rows to show, centred on the selection."""

    count = min(total, max_visible)
    start = 0
    if total > max_visible:
        start = max(0, selected_index - count // 2)
        start = min(start, total - count)
    return start, start + count


def render_completion_menu(
    completions: Sequence[Completion],
    selected_index: int,
    *,
    max_visible: int = DEFAULT_MAX_VISIBLE,
    value_width: int = DEFAULT_VALUE_WIDTH,
) -> str:
    if not completions or max_visible <= 0:
        return ""
    start, end = visible_window(len(completions), selected_index, max_visible)
    return "\n".join(
        render_completion_item(completions[index], index == selected_index, value_width) for index in range(start, end)
    )


class CompletionMenu:
    """Selection state over a sorted completion list.

    The menu is active exactly when it holds at least one completion, and the
    selection wraps in both directions.
    """

    def __init__(self) -> None:
        self._completions: tuple[Completion, ...] = ()
        self._selected_index = 0

    @property
    def completions(self) -> tuple[Completion, ...]:
        return self._completions

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def is_active(self) -> bool:
        return bool(self._completions)

    @property
    def selected(self) -> Completion | None:
        if not self._completions:
            return None
        return self._completions[self._selected_index]

    def set_completions(self, completions: Sequence[Completion]) -> None:
        self._completions = tuple(completions)
        self._selected_index = 0

    def select_next(self) -> None:
        if self._completions:
            self._selected_index = (self._selected_index + 1) % len(self._completions)

    def select_previous(self) -> None:
        if self._completions:
            self._selected_index = (self._selected_index - 1) % len(self._completions)

    def clear(self) -> None:
        self._completions = ()
        self._selected_index = 0

    def render(self, *, max_visible: int = DEFAULT_MAX_VISIBLE, value_width: int = DEFAULT_VALUE_WIDTH) -> str:
        return render_completion_menu(
            self._completions, self._selected_index, max_visible=max_visible, value_width=value_width
        )
