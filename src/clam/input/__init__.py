"""Input model and tokenizer."""

from .parser import tokenize, update_input_state_with_tokens
from .state import HistoryEntry, InputState, Token, TokenType, create_input_state

__all__ = [
    "HistoryEntry",
    "InputState",
    "Token",
    "TokenType",
    "create_input_state",
    "tokenize",
    "update_input_state_with_tokens",
]
