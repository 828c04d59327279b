"""Completion engine."""

from .history import HistoryProvider
from .integration import CompletionIntegration, default_manager
from .keys import CompletionKeyHandler, KeyAction, KeyModifiers
from .manager import CompletionManager
from .menu import CompletionMenu
from .scoring import score_completion, sort_completions
from .sequence import RequestSequencer
from .terminal import MenuRenderer, clear_menu, wrap_menu_render
from .trigger import TriggerResult, TriggerType, detect_trigger
from .types import COMPLETION_ICONS, Completer, Completion, CompletionGroup

__all__ = [
    "COMPLETION_ICONS",
    "Completer",
    "Completion",
    "CompletionGroup",
    "CompletionIntegration",
    "CompletionKeyHandler",
    "CompletionManager",
    "CompletionMenu",
    "HistoryProvider",
    "KeyAction",
    "KeyModifiers",
    "MenuRenderer",
    "RequestSequencer",
    "TriggerResult",
    "TriggerType",
    "clear_menu",
    "default_manager",
    "detect_trigger",
    "score_completion",
    "sort_completions",
    "wrap_menu_render",
]
