"""Command-name completion for the first word of a shell line."""

from __future__ import annotations

from collections.abc import Iterable

from clam.completion.history import extract_command
from clam.completion.recommended import RECOMMENDED_COMMANDS, get_command_description, is_recommended_command
from clam.completion.scoring import score_completion
from clam.completion.types import COMPLETION_ICONS, Completer, Completion, CompletionGroup
from clam.input.state import HistoryEntry, InputState, TokenType
from clam.types import Mode


def _in_command_position(state: InputState) -> bool:
    if not state.raw_text.strip():
        return True
    for index, token in enumerate(state.tokens):
        if token.type is TokenType.WHITESPACE:
            continue
        return index == state.token_index or state.cursor_pos <= token.end
    return True


def _command_history(history: tuple[HistoryEntry, ...]) -> list[HistoryEntry]:
    """History lines reduced to their command word, so ``git status`` counts for ``git``."""

    return [HistoryEntry(command=extract_command(entry.command), timestamp=entry.timestamp) for entry in history]


class CommandCompleter(Completer):
    """Suggests command names; catalogue entries rank above other commands."""

    name = "command"

    def __init__(self, commands: Iterable[str] = RECOMMENDED_COMMANDS) -> None:
        self._commands = tuple(commands)

    def is_relevant(self, state: InputState) -> bool:
        return state.mode is Mode.SHELL and _in_command_position(state)

    async def get_completions(self, state: InputState) -> list[Completion]:
        prefix = state.prefix.strip()
        history = _command_history(state.history)
        completions: list[Completion] = []
        for command in self._commands:
            score = score_completion(prefix, command, history)
            if score <= 0:
                continue
            completions.append(
                Completion(
                    value=command,
                    group=(
                        CompletionGroup.RECOMMENDED_COMMAND
                        if is_recommended_command(command)
                        else CompletionGroup.OTHER_COMMAND
                    ),
                    score=score,
                    source=self.name,
                    description=get_command_description(command),
                    icon=COMPLETION_ICONS["command"],
                )
            )
        return completions
