"""Completion for local slash commands."""

from __future__ import annotations

from collections.abc import Iterable

from clam.commands import SLASH_COMMANDS, SlashCommand
from clam.completion.scoring import score_completion
from clam.completion.types import COMPLETION_ICONS, Completer, Completion, CompletionGroup
from clam.input.state import InputState
from clam.types import Mode


class SlashCompleter(Completer):
    name = "slash"

    def __init__(self, commands: Iterable[SlashCommand] = SLASH_COMMANDS) -> None:
        self._commands = tuple(commands)

    def is_relevant(self, state: InputState) -> bool:
        return state.mode is Mode.SLASH or state.raw_text.startswith("/")

    async def get_completions(self, state: InputState) -> list[Completion]:
        before = state.text_before_cursor
        if " " in before:
            return []
        query = before.removeprefix("/")
        completions: list[Completion] = []
        for command in self._commands:
            score = score_completion(query, command.name, state.history)
            if score <= 0:
                continue
            completions.append(
                Completion(
                    value=command.trigger,
                    group=CompletionGroup.INTERNAL_COMMAND,
                    score=score,
                    source=self.name,
                    description=command.description,
                    icon=COMPLETION_ICONS["internal"],
                    replace_input=True,
                )
            )
        return completions
