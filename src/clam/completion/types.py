"""Core completion types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

from clam.input.state import InputState


class CompletionGroup(IntEnum):
    """Ranking tier; lower values are shown first."""

    TOP_SUGGESTION = 0
    INTERNAL_COMMAND = 1
    BUILTIN = 2
    RECOMMENDED_COMMAND = 3
    OTHER_COMMAND = 4
    FILE = 5
    GIT_REF = 6
    ENTITY = 7
    OTHER = 8


COMPLETION_ICONS: dict[str, str] = {
    "command": "\u25b8",  # ▸
    "internal": "\u2318",  # ⌘
    "file": "\u25a1",  # □
    "directory": "\u25a0",  # ■
    "entity": "@",
    "git": "\u2442",  # ⑂
}


@dataclass(frozen=True)
class Completion:
    """One suggestion offered to the user."""

    value: str
    group: CompletionGroup
    score: int
    source: str
    display: str | None = None
    description: str | None = None
    icon: str | None = None
    replace_input: bool = False

    @property
    def label(self) -> str:
        return self.display if self.display is not None else self.value


class Completer(ABC):
    """A pluggable source of completions."""

    name: str = "base"

    @abstractmethod
    def is_relevant(self, state: InputState) -> bool:
        """Cheap check run on every request before any real work."""

    @abstractmethod
    async def get_completions(self, state: InputState) -> list[Completion]:
        """Produce scored completions for ``state``."""
