"""Syntax coloring for the input line.

``TOKEN_STYLES`` is the one table of token colors; the prompt lexer and the
CLI output both derive from it.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.color import ColorSystem
from rich.style import Style

from clam.input.parser import tokenize
from clam.input.state import InputState, Token, TokenType

TOKEN_STYLES: dict[TokenType, str] = {
    TokenType.COMMAND: "bold",
    TokenType.OPTION: "cyan",
    TokenType.ARGUMENT: "",
    TokenType.PATH: "underline",
    TokenType.ENTITY: "magenta",
    TokenType.OPERATOR: "yellow",
    TokenType.STRING: "green",
    TokenType.WHITESPACE: "",
}


def style_for(token_type: TokenType) -> Style:
    return Style.parse(TOKEN_STYLES[token_type]) if TOKEN_STYLES[token_type] else Style.null()


def render_tokens(tokens: Iterable[Token], *, color_system: ColorSystem = ColorSystem.STANDARD) -> str:
    return "".join(style_for(token.type).render(token.value, color_system=color_system) for token in tokens)


def render_input(state: InputState, *, color_system: ColorSystem = ColorSystem.STANDARD) -> str:
    """Render the tokenized input as an ANSI-colored string."""

    if not state.tokens:
        return state.raw_text
    return render_tokens(state.tokens, color_system=color_system)


def render_line(text: str, *, color_system: ColorSystem = ColorSystem.STANDARD) -> str:
    return render_tokens(tokenize(text), color_system=color_system)
