import pytest

from clam.completion.keys import CompletionKeyHandler, KeyAction, KeyModifiers
from clam.completion.menu import CompletionMenu
from clam.completion.types import Completion, CompletionGroup


@pytest.fixture
def handler() -> CompletionKeyHandler:
    menu = CompletionMenu()
    menu.set_completions([Completion(value, CompletionGroup.OTHER, 50, "t") for value in ("a", "b", "c")])
    return CompletionKeyHandler(menu)


def test_key_mapping(handler: CompletionKeyHandler) -> None:
    assert handler.handle_key("Tab") is KeyAction.NEXT
    assert handler.handle_key("ArrowDown") is KeyAction.NEXT
    assert handler.menu.selected_index == 2
    assert handler.handle_key("Tab", KeyModifiers(shift=True)) is KeyAction.PREVIOUS
    assert handler.handle_key("ArrowUp") is KeyAction.PREVIOUS
    assert handler.menu.selected_index == 0
    assert handler.handle_key("Enter") is KeyAction.ACCEPT
    assert handler.handle_key("Escape") is KeyAction.DISMISS
    assert handler.handle_key("x") is KeyAction.NONE


def test_accept_returns_value_and_resets(handler: CompletionKeyHandler) -> None:
    handler.handle_key("Tab")
    assert handler.accept() == "b"
    assert not handler.is_active
    assert handler.accept() is None


def test_reset(handler: CompletionKeyHandler) -> None:
    handler.reset()
    assert handler.selected is None
