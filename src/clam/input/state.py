"""Input state model shared by rendering, classification and completion."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from clam.types import Mode


class TokenType(str, Enum):
    """Token kinds used for coloring and completion context."""

    COMMAND = "command"
    ARGUMENT = "argument"
    OPTION = "option"
    ENTITY = "entity"
    PATH = "path"
    STRING = "string"
    OPERATOR = "operator"
    WHITESPACE = "whitespace"


@dataclass(frozen=True)
class Token:
    """One token of raw input, with half-open offsets."""

    type: TokenType
    value: str
    start: int
    end: int


@dataclass(frozen=True)
class HistoryEntry:
    """A previously run command, used for recency scoring."""

    command: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class InputState:
    """Snapshot of the input line at one keystroke.

    A new instance is built for every edit. ``tokens`` and the cursor fields
    are filled in by ``update_input_state_with_tokens``.
    """

    raw_text: str
    cursor_pos: int
    mode: Mode
    cwd: str
    history: tuple[HistoryEntry, ...] = ()
    tokens: tuple[Token, ...] = ()
    token_index: int = 0
    current_token: Token | None = None
    prefix: str = ""
    is_entity_trigger: bool = False
    is_slash_command: bool = False

    @property
    def text_before_cursor(self) -> str:
        return self.raw_text[: self.cursor_pos]

    @property
    def text_after_cursor(self) -> str:
        return self.raw_text[self.cursor_pos :]


def create_input_state(
    raw_text: str,
    cursor_pos: int,
    mode: Mode,
    cwd: str,
    history: Iterable[HistoryEntry] = (),
) -> InputState:
    """Create an untokenized state with the cursor clamped into the text."""

    cursor = max(0, min(cursor_pos, len(raw_text)))
    return InputState(
        raw_text=raw_text,
        cursor_pos=cursor,
        mode=mode,
        cwd=cwd,
        history=tuple(history),
        is_slash_command=raw_text.startswith("/"),
    )
