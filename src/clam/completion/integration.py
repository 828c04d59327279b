"""Session glue between keystrokes, completers, the menu and the terminal."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from clam.completion.completers import CommandCompleter, EntityCompleter, SlashCompleter
from clam.completion.history import HistoryProvider
from clam.completion.keys import NO_MODIFIERS, CompletionKeyHandler, KeyAction, KeyModifiers
from clam.completion.manager import DEFAULT_MAX_RESULTS, DEFAULT_TIMEOUT_SECONDS, CompletionManager
from clam.completion.menu import DEFAULT_MAX_VISIBLE, DEFAULT_VALUE_WIDTH, CompletionMenu
from clam.completion.sequence import RequestSequencer
from clam.completion.terminal import MenuRenderer
from clam.completion.trigger import detect_trigger
from clam.completion.types import Completion
from clam.core.classifier import ModeClassifier
from clam.input.parser import update_input_state_with_tokens
from clam.input.state import InputState, create_input_state
from clam.types import Mode


@dataclass(frozen=True)
class KeypressResult:
    handled: bool
    insert_text: str | None = None
    replace_input: bool = False
    suppress: bool = False


@dataclass(frozen=True)
class CompletionSnapshot:
    is_visible: bool
    menu_lines: int
    selected: Completion | None
    completions: tuple[Completion, ...]


def default_manager() -> CompletionManager:
    manager = CompletionManager()
    manager.register(CommandCompleter())
    manager.register(SlashCompleter())
    manager.register(EntityCompleter())
    return manager


class CompletionIntegration:
    """Owns the per-session completion state.

    Every refresh takes a sequence number; a result is applied only if no newer
    refresh started while it was being computed.
    """

    def __init__(
        self,
        manager: CompletionManager | None = None,
        *,
        classifier: ModeClassifier | None = None,
        history: HistoryProvider | None = None,
        cwd: str | None = None,
        max_visible: int = DEFAULT_MAX_VISIBLE,
        value_width: int = DEFAULT_VALUE_WIDTH,
        max_results: int = DEFAULT_MAX_RESULTS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        debounce_seconds: float = 0.0,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.manager = manager or default_manager()
        self.classifier = classifier
        self.history = history or HistoryProvider()
        self.cwd = cwd or os.getcwd()
        self.menu = CompletionMenu()
        self.keys = CompletionKeyHandler(self.menu)
        self.renderer = MenuRenderer()
        self.mode = Mode.NATURAL_LANGUAGE
        self._max_visible = max_visible
        self._value_width = value_width
        self._max_results = max_results
        self._timeout = timeout_seconds
        self._debounce = debounce_seconds
        self._sleep = sleep
        self._completion_seq = RequestSequencer()
        self._mode_seq = RequestSequencer()

    def build_state(self, raw_text: str, cursor_pos: int, mode: Mode | None = None) -> InputState:
        state = create_input_state(raw_text, cursor_pos, mode or self.mode, self.cwd, self.history.entries())
        return update_input_state_with_tokens(state)

    def refresh_mode(self, raw_text: str) -> Mode:
        """Synchronous mode for live coloring; supersedes pending authoritative results."""

        self._mode_seq.invalidate()
        if self.classifier is not None:
            self.mode = self.classifier.classify_sync(raw_text)
        return self.mode

    async def classify(self, raw_text: str) -> Mode | None:
        """Authoritative mode, or ``None`` when a newer request superseded this one."""

        if self.classifier is None:
            return self.mode
        seq = self._mode_seq.next()
        mode = await self.classifier.classify(raw_text)
        if not self._mode_seq.is_current(seq):
            logger.debug("completion.mode.stale seq={} latest={}", seq, self._mode_seq.latest)
            return None
        self.mode = mode
        return mode

    async def update_completions(self, raw_text: str, cursor_pos: int, mode: Mode | None = None) -> bool:
        """Recompute completions for the line; returns whether the result was applied."""

        seq = self._completion_seq.next()
        if self._debounce > 0:
            await self._sleep(self._debounce)
            if not self._completion_seq.is_current(seq):
                return False

        state = self.build_state(raw_text, cursor_pos, mode)
        if not detect_trigger(state).triggered:
            self.menu.clear()
            return True

        completions = await self.manager.get_completions(state, max_results=self._max_results, timeout=self._timeout)
        if not self._completion_seq.is_current(seq):
            logger.debug("completion.result.stale seq={} latest={}", seq, self._completion_seq.latest)
            return False
        self.menu.set_completions(completions)
        return True

    def handle_keypress(self, key: str, modifiers: KeyModifiers = NO_MODIFIERS) -> KeypressResult:
        if not self.keys.is_active:
            return KeypressResult(handled=False)

        action = self.keys.handle_key(key, modifiers)
        if action in (KeyAction.NEXT, KeyAction.PREVIOUS):
            return KeypressResult(handled=True, suppress=True)
        if action is KeyAction.ACCEPT:
            selected = self.keys.selected
            value = self.keys.accept()
            if value is None or selected is None:
                return KeypressResult(handled=False)
            return KeypressResult(handled=True, insert_text=value, replace_input=selected.replace_input, suppress=True)
        if action is KeyAction.DISMISS:
            self._completion_seq.invalidate()
            self.keys.reset()
            return KeypressResult(handled=True, suppress=True)
        return KeypressResult(handled=False)

    def render_menu(self) -> str:
        if not self.menu.is_active:
            return self.renderer.clear()
        return self.renderer.render(self.menu.render(max_visible=self._max_visible, value_width=self._value_width))

    def clear_menu_output(self) -> str:
        return self.renderer.clear()

    @property
    def is_active(self) -> bool:
        return self.menu.is_active

    def snapshot(self) -> CompletionSnapshot:
        return CompletionSnapshot(
            is_visible=self.menu.is_active,
            menu_lines=self.renderer.menu_lines_shown,
            selected=self.menu.selected,
            completions=self.menu.completions,
        )

    def reset(self) -> str:
        """Drop pending results and the menu; returns the sequence that erases any drawn menu."""

        self._completion_seq.invalidate()
        self.keys.reset()
        return self.renderer.clear()

    def set_cwd(self, cwd: str) -> None:
        self.cwd = cwd
