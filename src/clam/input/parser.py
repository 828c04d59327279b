"""Tokenizer for the input line."""

from __future__ import annotations

import dataclasses

from clam.input.state import InputState, Token, TokenType

# Longer operators first so a single scan yields the longest match.
OPERATORS: tuple[str, ...] = ("||", "|", ">>", ">", "<<", "<", "&&", ";", "&")
WHITESPACE = frozenset(" \t")
QUOTES = frozenset("\"'")


def _match_operator(text: str, pos: int) -> str | None:
    for op in OPERATORS:
        if text.startswith(op, pos):
            return op
    return None


def _is_path(value: str) -> bool:
    return "/" in value or value in (".", "..")


def get_token_type(value: str, *, is_first: bool) -> TokenType:
    """Classify one word by its text and position in the command segment."""

    if value in OPERATORS:
        return TokenType.OPERATOR
    if value.startswith("-"):
        return TokenType.OPTION
    if value.startswith("@"):
        return TokenType.ENTITY
    if _is_path(value) and not is_first:
        return TokenType.PATH
    if is_first:
        return TokenType.COMMAND
    return TokenType.ARGUMENT


def _scan_quoted(text: str, pos: int) -> int:
    quote = text[pos]
    pos += 1
    while pos < len(text) and text[pos] != quote:
        pos += 2 if text[pos] == "\\" and pos + 1 < len(text) else 1
    if pos < len(text):
        pos += 1
    return pos


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens; joining their values gives ``text`` back."""

    tokens: list[Token] = []
    pos = 0
    is_first = True
    length = len(text)

    while pos < length:
        start = pos
        char = text[pos]

        if char in WHITESPACE:
            while pos < length and text[pos] in WHITESPACE:
                pos += 1
            tokens.append(Token(TokenType.WHITESPACE, text[start:pos], start, pos))
            continue

        if char in QUOTES:
            pos = _scan_quoted(text, pos)
            tokens.append(Token(TokenType.STRING, text[start:pos], start, pos))
            is_first = False
            continue

        op = _match_operator(text, pos)
        if op is not None:
            pos += len(op)
            tokens.append(Token(TokenType.OPERATOR, op, start, pos))
            # Each pipeline or chain segment starts a new command.
            is_first = True
            continue

        while (
            pos < length
            and text[pos] not in WHITESPACE
            and text[pos] not in QUOTES
            and _match_operator(text, pos) is None
        ):
            pos += 1
        value = text[start:pos]
        tokens.append(Token(get_token_type(value, is_first=is_first), value, start, pos))
        is_first = False

    return tokens


def find_token_index(tokens: list[Token] | tuple[Token, ...], cursor_pos: int) -> int:
    """Index of the token holding the cursor, else the last token, else 0."""

    for index, token in enumerate(tokens):
        if token.start <= cursor_pos <= token.end:
            return index
    return max(0, len(tokens) - 1)


def first_word(text: str) -> str:
    """First non-whitespace token value of ``text``."""

    for token in tokenize(text):
        if token.type is not TokenType.WHITESPACE:
            return token.value
    return ""


def update_input_state_with_tokens(state: InputState) -> InputState:
    """Return a copy of ``state`` with tokens and cursor context filled in."""

    tokens = tuple(tokenize(state.raw_text))
    token_index = find_token_index(tokens, state.cursor_pos) if tokens else 0
    current = tokens[token_index] if tokens else None

    prefix = ""
    if current is not None and state.cursor_pos >= current.start:
        prefix = current.value[: state.cursor_pos - current.start]

    is_entity_trigger = (current is not None and current.type is TokenType.ENTITY) or prefix.startswith("@")

    return dataclasses.replace(
        state,
        tokens=tokens,
        token_index=token_index,
        current_token=current,
        prefix=prefix,
        is_entity_trigger=is_entity_trigger,
    )
