"""Escape sequences for drawing the menu without touching scrollback."""

from __future__ import annotations

SAVE_CURSOR = "\x1b[s"
RESTORE_CURSOR = "\x1b[u"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"
CLEAR_TO_END = "\x1b[K"


def move_up(n: int) -> str:
    return f"\x1b[{n}A" if n > 0 else ""


def move_down(n: int) -> str:
    return f"\x1b[{n}B" if n > 0 else ""


def wrap_menu_render(content: str, line_count: int, hide_cursor: bool = False) -> str:
    """Bracket ``content`` with save and restore cursor so the prompt line stays put."""

    if not content or line_count <= 0:
        return ""
    parts = [SAVE_CURSOR]
    if hide_cursor:
        parts.append(HIDE_CURSOR)
    parts.append(content)
    if hide_cursor:
        parts.append(SHOW_CURSOR)
    parts.append(RESTORE_CURSOR)
    return "".join(parts)


def clear_menu(line_count: int) -> str:
    """Move up and erase exactly ``line_count`` lines."""

    if line_count <= 0:
        return ""
    return (move_up(1) + CLEAR_LINE) * line_count


class MenuRenderer:
    """Tracks how many menu lines are on screen so clearing is always exact."""

    def __init__(self, *, hide_cursor: bool = True) -> None:
        self.hide_cursor = hide_cursor
        self.menu_lines_shown = 0

    def render(self, content: str) -> str:
        """Clear the previous menu, then draw ``content``."""

        output = self.clear()
        line_count = content.count("\n") + 1 if content else 0
        wrapped = wrap_menu_render(content, line_count, hide_cursor=self.hide_cursor)
        if wrapped:
            self.menu_lines_shown = line_count
        return output + wrapped

    def clear(self) -> str:
        output = clear_menu(self.menu_lines_shown)
        self.menu_lines_shown = 0
        return output
