"""Keyboard navigation for the completion menu."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clam.completion.menu import CompletionMenu
from clam.completion.types import Completion


class KeyAction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    ACCEPT = "accept"
    DISMISS = "dismiss"
    NONE = "none"


@dataclass(frozen=True)
class KeyModifiers:
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False


NO_MODIFIERS = KeyModifiers()


class CompletionKeyHandler:
    """Maps key presses onto menu navigation."""

    def __init__(self, menu: CompletionMenu) -> None:
        self.menu = menu

    def handle_key(self, key: str, modifiers: KeyModifiers = NO_MODIFIERS) -> KeyAction:
        if key == "Tab":
            if modifiers.shift:
                self.menu.select_previous()
                return KeyAction.PREVIOUS
            self.menu.select_next()
            return KeyAction.NEXT
        if key == "ArrowDown":
            self.menu.select_next()
            return KeyAction.NEXT
        if key == "ArrowUp":
            self.menu.select_previous()
            return KeyAction.PREVIOUS
        if key == "Enter":
            return KeyAction.ACCEPT
        if key == "Escape":
            return KeyAction.DISMISS
        return KeyAction.NONE

    @property
    def selected(self) -> Completion | None:
        return self.menu.selected

    @property
    def is_active(self) -> bool:
        return self.menu.is_active

    def accept(self) -> str | None:
        """Consume the selection: return its value and put the menu back to idle."""

        selected = self.menu.selected
        self.menu.clear()
        return selected.value if selected is not None else None

    def reset(self) -> None:
        self.menu.clear()
