"""prompt_toolkit adapters: live mode coloring and completion."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, Callable, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer
from prompt_toolkit.completion import Completion as PromptCompletion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from clam.completion.integration import CompletionIntegration
from clam.completion.trigger import detect_trigger
from clam.completion.types import Completion
from clam.core.classifier import ModeClassifier
from clam.input.parser import tokenize
from clam.input.renderer import TOKEN_STYLES
from clam.input.state import TokenType
from clam.types import Mode

TEXT_ATTRIBUTES = frozenset({"bold", "italic", "underline", "reverse"})


def to_prompt_style(style: str) -> str:
    """Translate a rich style string such as ``bold cyan`` into prompt_toolkit syntax."""

    return " ".join(part if part in TEXT_ATTRIBUTES else f"ansi{part}" for part in style.split())


TOKEN_CLASSES: dict[TokenType, str] = {
    token_type: f"class:token.{token_type.value}" if style else "" for token_type, style in TOKEN_STYLES.items()
}

PROMPT_STYLE: dict[str, str] = {
    **{f"token.{token_type.value}": to_prompt_style(style) for token_type, style in TOKEN_STYLES.items() if style},
    "mode.nl": "ansicyan",
    "mode.slash": "ansimagenta",
}


class ModeLexer(Lexer):
    """Colors shell input token by token and natural language as one span."""

    def __init__(self, classifier: ModeClassifier) -> None:
        self._classifier = classifier

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno >= len(lines):
                return []
            return self.lex_line(lines[lineno])

        return get_line

    def lex_line(self, line: str) -> StyleAndTextTuples:
        mode = self._classifier.classify_sync(line)
        if mode is Mode.NATURAL_LANGUAGE:
            return [("class:mode.nl", line)]
        if mode is Mode.SLASH:
            return [("class:mode.slash", line)]
        return [(TOKEN_CLASSES[token.type], token.value) for token in tokenize(line)]


def to_prompt_completion(item: Completion, start_position: int) -> PromptCompletion:
    return PromptCompletion(
        item.value,
        start_position=start_position,
        display=f"{item.icon} {item.label}" if item.icon else item.label,
        display_meta=item.description or "",
    )


class ManagerCompleter(Completer):
    """Bridges prompt_toolkit completion onto the completion engine."""

    def __init__(self, integration: CompletionIntegration) -> None:
        self._integration = integration

    async def get_completions_async(
        self, document: Document, complete_event: CompleteEvent
    ) -> AsyncGenerator[PromptCompletion, None]:
        for completion in await self._collect(document):
            yield completion

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[PromptCompletion]:
        """Blocking variant for callers outside an event loop."""
        return asyncio.run(self._collect(document))

    async def _collect(self, document: Document) -> list[PromptCompletion]:
        integration = self._integration
        text = document.text
        mode = integration.refresh_mode(text)
        applied = await integration.update_completions(text, document.cursor_position, mode)
        if not applied or not integration.is_active:
            return []
        state = integration.build_state(text, document.cursor_position, mode)
        trigger = detect_trigger(state)
        replace_length = state.cursor_pos - trigger.start
        return [
            to_prompt_completion(item, -state.cursor_pos if item.replace_input else -replace_length)
            for item in integration.menu.completions
        ]
