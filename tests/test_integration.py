import asyncio
import time

import pytest

from clam.completion.integration import CompletionIntegration, default_manager
from clam.completion.keys import KeyModifiers
from clam.completion.manager import CompletionManager
from clam.completion.terminal import RESTORE_CURSOR, SAVE_CURSOR, clear_menu
from clam.completion.types import Completer, Completion, CompletionGroup
from clam.core.classifier import ModeClassifier
from clam.core.oracle import CommandOracle
from clam.input.state import InputState
from clam.types import Mode


class GatedCompleter(Completer):
    """Echoes the typed text back, holding the request for ``gated`` until released."""

    name = "gated"

    def __init__(self, gated: str) -> None:
        self.gated = gated
        self.release = asyncio.Event()

    def is_relevant(self, state: InputState) -> bool:
        return True

    async def get_completions(self, state: InputState) -> list[Completion]:
        if state.raw_text == self.gated:
            await self.release.wait()
        return [
            Completion(f"{state.raw_text}-1", CompletionGroup.OTHER, 60, self.name),
            Completion(f"{state.raw_text}-2", CompletionGroup.OTHER, 50, self.name),
        ]


def _integration(completer: Completer, **kwargs) -> CompletionIntegration:
    manager = CompletionManager()
    manager.register(completer)
    return CompletionIntegration(manager, cwd="/tmp", timeout_seconds=1.0, **kwargs)


@pytest.mark.asyncio
async def test_stale_completion_results_are_discarded() -> None:
    completer = GatedCompleter("g")
    integration = _integration(completer)

    older = asyncio.create_task(integration.update_completions("g", 1, Mode.SHELL))
    await asyncio.sleep(0)
    assert await integration.update_completions("gi", 2, Mode.SHELL)
    completer.release.set()
    assert await older is False
    assert [item.value for item in integration.menu.completions] == ["gi-1", "gi-2"]


@pytest.mark.asyncio
async def test_debounce_drops_superseded_requests() -> None:
    integration = _integration(GatedCompleter("never"), debounce_seconds=0.01)
    first = asyncio.create_task(integration.update_completions("g", 1, Mode.SHELL))
    await asyncio.sleep(0)
    second = asyncio.create_task(integration.update_completions("gi", 2, Mode.SHELL))
    assert await first is False
    assert await second is True
    assert integration.menu.completions[0].value == "gi-1"


@pytest.mark.asyncio
async def test_no_trigger_clears_menu() -> None:
    integration = _integration(GatedCompleter("never"))
    await integration.update_completions("g", 1, Mode.SHELL)
    assert integration.is_active
    await integration.update_completions("tell me", 7, Mode.NATURAL_LANGUAGE)
    assert not integration.is_active


@pytest.mark.asyncio
async def test_keypress_navigation_and_accept() -> None:
    integration = _integration(GatedCompleter("never"))
    assert not integration.handle_keypress("Tab").handled

    await integration.update_completions("g", 1, Mode.SHELL)
    result = integration.handle_keypress("Tab")
    assert result.handled and result.suppress
    assert integration.menu.selected_index == 1
    integration.handle_keypress("Tab", KeyModifiers(shift=True))
    accepted = integration.handle_keypress("Enter")
    assert accepted.insert_text == "g-1"
    assert not integration.is_active
    assert not integration.handle_keypress("x").handled


@pytest.mark.asyncio
async def test_escape_dismisses() -> None:
    integration = _integration(GatedCompleter("never"))
    await integration.update_completions("g", 1, Mode.SHELL)
    assert integration.handle_keypress("Escape").handled
    assert not integration.is_active


@pytest.mark.asyncio
async def test_render_and_clear_track_lines() -> None:
    integration = _integration(GatedCompleter("never"))
    await integration.update_completions("g", 1, Mode.SHELL)
    output = integration.render_menu()
    assert SAVE_CURSOR in output and output.endswith(RESTORE_CURSOR)
    assert integration.snapshot().menu_lines == 2
    assert integration.clear_menu_output().count("\x1b[2K") == 2
    assert integration.snapshot().menu_lines == 0
    assert integration.clear_menu_output() == ""


@pytest.mark.asyncio
async def test_reset_erases_the_drawn_menu() -> None:
    integration = _integration(GatedCompleter("never"))
    await integration.update_completions("g", 1, Mode.SHELL)
    integration.render_menu()
    assert integration.reset() == clear_menu(2)
    assert not integration.is_active
    assert integration.snapshot().menu_lines == 0
    assert integration.reset() == ""


@pytest.mark.asyncio
async def test_stale_classification_is_discarded() -> None:
    def slow_lookup(name: str) -> str | None:
        time.sleep(0.05)
        return None

    classifier = ModeClassifier(CommandOracle(lookup=slow_lookup))
    integration = CompletionIntegration(default_manager(), classifier=classifier, cwd="/tmp")

    pending = asyncio.create_task(integration.classify("gti status"))
    await asyncio.sleep(0)
    assert integration.refresh_mode("git") is Mode.SHELL
    assert await pending is None
    assert integration.mode is Mode.SHELL
    assert await integration.classify("gti status") is Mode.INVALID
    assert integration.mode is Mode.INVALID


@pytest.mark.asyncio
async def test_default_manager_end_to_end(tmp_path) -> None:
    (tmp_path / "notes.md").write_text("")
    integration = CompletionIntegration(cwd=str(tmp_path))
    await integration.update_completions("look at @no", 11, Mode.NATURAL_LANGUAGE)
    assert [item.value for item in integration.menu.completions] == ["@notes.md"]
    await integration.update_completions("/he", 3, Mode.SLASH)
    assert integration.menu.selected is not None
    assert integration.menu.selected.value == "/help"
    assert integration.menu.selected.replace_input
