"""Detect which kind of completion the cursor position asks for."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clam.input.state import InputState, TokenType
from clam.types import Mode


class TriggerType(str, Enum):
    ENTITY = "entity"
    SLASH = "slash"
    COMMAND = "command"
    ARGUMENT = "argument"
    NONE = "none"


@dataclass(frozen=True)
class TriggerResult:
    type: TriggerType
    prefix: str = ""
    start: int = 0

    @property
    def triggered(self) -> bool:
        return self.type is not TriggerType.NONE


NO_TRIGGER = TriggerResult(TriggerType.NONE)


def _in_quotes(text: str) -> bool:
    quote: str | None = None
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote is None and char in "\"'":
            quote = char
        elif char == quote:
            quote = None
    return quote is not None


def _entity_trigger(before: str) -> TriggerResult | None:
    at = before.rfind("@")
    if at == -1:
        return None
    if at > 0 and not before[at - 1].isspace():
        return None
    query = before[at + 1 :]
    if any(char.isspace() for char in query):
        return None
    if _in_quotes(before[:at]):
        return None
    return TriggerResult(TriggerType.ENTITY, prefix=query, start=at)


def _word_start(before: str) -> int:
    index = len(before)
    while index > 0 and not before[index - 1].isspace():
        index -= 1
    return index


def detect_trigger(state: InputState) -> TriggerResult:
    """First matching trigger: ``@`` entity, slash command, command word, argument."""

    before = state.text_before_cursor

    entity = _entity_trigger(before)
    if entity is not None:
        return entity

    if state.raw_text.startswith("/") and " " not in before:
        return TriggerResult(TriggerType.SLASH, prefix=before[1:], start=0)

    if state.mode is not Mode.SHELL:
        return NO_TRIGGER

    stripped = before.lstrip()
    if " " not in stripped and "\t" not in stripped:
        return TriggerResult(TriggerType.COMMAND, prefix=stripped, start=len(before) - len(stripped))

    after = state.text_after_cursor
    at_word_end = not after or after[0].isspace()
    current = state.current_token
    if at_word_end and (current is None or current.type is not TokenType.OPERATOR):
        start = _word_start(before)
        return TriggerResult(TriggerType.ARGUMENT, prefix=before[start:], start=start)

    return NO_TRIGGER
