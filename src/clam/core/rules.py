"""Ordered mode detection rules.

Rules are evaluated top to bottom and the first non-``None`` answer wins.
Each rule receives the raw text, the trimmed text, the first word and
``known``: the oracle's verdict on the first word, or ``None`` when the
oracle has not been consulted (the synchronous pass). Only non-definitive
rules may look at ``known``.
"""

from __future__ import annotations

import re
from typing import TypeAlias

from collections.abc import Callable
from dataclasses import dataclass

from clam.commands import KNOWN_SLASH_COMMANDS
from clam.core.oracle import ABSOLUTE_PATH_RE, COMMAND_WORD_RE, is_shell_builtin
from clam.input.parser import first_word
from clam.types import Mode

SHELL_OPERATORS_RE = re.compile(r"[|><;]|&&|\|\||\$\(|`")

# Real commands that people mostly type alone to run them.
PROMPT_AMBIGUOUS_COMMANDS: frozenset[str] = frozenset({"who", "date", "time", "man"})

# Real commands that are far more often the start of a sentence. Alone they
# are sent to the agent; "!" forces the shell.
SAFE_NL_COMMANDS: frozenset[str] = frozenset({
    "yes",
    "test",
    "true",
    "false",
    "wait",
    "read",
    "let",
    "type",
    "set",
    "make",
    "watch",
    "which",
    "where",
    "what",
})

AMBIGUOUS_COMMANDS: frozenset[str] = PROMPT_AMBIGUOUS_COMMANDS | SAFE_NL_COMMANDS

NL_ONLY_WORDS: frozenset[str] = frozenset({
    # responses
    "yes", "no", "ok", "okay", "sure", "thanks", "please",
    # greetings
    "hi", "hello", "hey", "bye",
    # pronouns
    "you", "i", "me", "my", "we", "us", "our", "it", "this", "that",
    # question words
    "what", "how", "why", "when", "where", "which", "who",
    # auxiliaries
    "do", "does", "did", "is", "are", "was", "were", "be", "have", "has", "had",
    "can", "could", "would", "will", "should",
    # prepositions and articles
    "the", "a", "an", "to", "of", "in", "for", "on", "with", "at", "by", "from",
    # common verbs and fillers
    "help", "give", "tell", "show", "know", "think", "want", "need",
    "about", "out", "up", "just", "more", "some", "all", "thing", "world",
})  # fmt: skip

QUESTION_WORDS: frozenset[str] = frozenset({"what", "how", "why", "when", "where", "who", "which"})
PURE_QUESTION_WORDS: frozenset[str] = frozenset({"what", "how", "why", "when"})

REQUEST_STARTERS: frozenset[str] = frozenset({"can", "could", "would", "will", "should", "please"})
REQUEST_PRONOUNS: frozenset[str] = frozenset({"you", "we", "i"})

TRAILING_PUNCT_RE = re.compile(r"[.,!?;:'\"]+$")
OUTER_PUNCT_RE = re.compile(r"[.,'\"“”‘’:;!?()]")
ONLY_WORDS_RE = re.compile(r"^[\w\s\-'’‘–—]*$")

RuleTest: TypeAlias = Callable[[str, str, str, bool | None], Mode | None]


@dataclass(frozen=True)
class DetectionRule:
    """One step of the cascade."""

    name: str
    test: RuleTest
    definitive: bool


@dataclass(frozen=True)
class Detection:
    """Which rule fired and what it answered."""

    mode: Mode
    rule: str
    definitive: bool


def _words(trimmed: str) -> list[str]:
    return trimmed.split()


def _strip_trailing_punct(word: str) -> str:
    return TRAILING_PUNCT_RE.sub("", word)


def is_nl_word(word: str) -> bool:
    return _strip_trailing_punct(word.lower()) in NL_ONLY_WORDS


def has_nl_tail(words: list[str]) -> bool:
    return any(is_nl_word(word) for word in words[1:])


def is_all_nl_words(trimmed: str) -> bool:
    words = _words(trimmed)
    return bool(words) and all(is_nl_word(word) for word in words)


def looks_like_question(trimmed: str, first: str) -> bool:
    words = _words(trimmed)
    lowered = first.lower()
    if lowered not in QUESTION_WORDS:
        return False
    if lowered in PURE_QUESTION_WORDS:
        return True
    return len(words) >= 2 and has_nl_tail(words)


def looks_like_request(trimmed: str) -> bool:
    words = [word.lower() for word in _words(trimmed)]
    if len(words) < 2:
        return False
    if words[0] in REQUEST_STARTERS and words[1] in REQUEST_PRONOUNS:
        return True
    return words[0] == "please"


def looks_like_nl(trimmed: str) -> bool:
    """Structural check for sentences that no word list covers."""

    text = OUTER_PUNCT_RE.sub("", trimmed)
    if not ONLY_WORDS_RE.match(text):
        return False
    words = text.split()
    if any(word.startswith("-") for word in words):
        return False
    return len(words) >= 3 and any(len(word) > 3 for word in words)


def has_shell_operators(text: str) -> bool:
    return SHELL_OPERATORS_RE.search(text) is not None


def _empty(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if not trimmed else None


def _explicit_nl(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if raw.startswith("?") else None


def _explicit_shell(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.SHELL if raw.startswith("!") else None


def _space_at_start(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if raw.startswith(" ") else None


def _known_slash(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    if not trimmed.startswith("/"):
        return None
    name = trimmed[1:].split(maxsplit=1)[0] if trimmed[1:].strip() else ""
    return Mode.SLASH if name in KNOWN_SLASH_COMMANDS else None


def _absolute_path(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    if not (trimmed.startswith("/") and ABSOLUTE_PATH_RE.match(first)):
        return None
    if known is False:
        return Mode.AMBIGUOUS
    return Mode.SHELL


def _unknown_slash(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.SLASH if trimmed.startswith("/") else None


def _shell_operators(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    if not has_shell_operators(trimmed):
        return None
    return Mode.INVALID if known is False else Mode.SHELL


def _env_variables(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.SHELL if "$" in trimmed else None


def _shell_builtin(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.SHELL if is_shell_builtin(first) else None


def _single_prompt_ambiguous(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    if len(_words(trimmed)) != 1:
        return None
    return Mode.AMBIGUOUS if first.lower() in PROMPT_AMBIGUOUS_COMMANDS else None


def _all_nl_words(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if is_all_nl_words(trimmed) else None


def _question(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if looks_like_question(trimmed, first) else None


def _request(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if looks_like_request(trimmed) else None


def _ambiguous_command_with_nl(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    lowered = first.lower()
    if lowered not in AMBIGUOUS_COMMANDS:
        return None
    words = _words(trimmed)
    if len(words) == 1:
        return Mode.AMBIGUOUS if lowered in PROMPT_AMBIGUOUS_COMMANDS else Mode.NATURAL_LANGUAGE
    return Mode.NATURAL_LANGUAGE if has_nl_tail(words) else None


def _command_exists(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.SHELL if known is True else None


def _structural_nl(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE if looks_like_nl(trimmed) else None


def _unknown_command_with_nl(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    if known is True or not COMMAND_WORD_RE.match(first):
        return None
    return Mode.NATURAL_LANGUAGE if has_nl_tail(_words(trimmed)) else None


def _command_like(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    if not COMMAND_WORD_RE.match(first):
        return None
    return Mode.INVALID if known is False else Mode.SHELL


def _fallback_nl(raw: str, trimmed: str, first: str, known: bool | None) -> Mode | None:
    return Mode.NATURAL_LANGUAGE


DETECTION_RULES: tuple[DetectionRule, ...] = (
    DetectionRule("empty", _empty, definitive=True),
    DetectionRule("explicit-nl", _explicit_nl, definitive=True),
    DetectionRule("explicit-shell", _explicit_shell, definitive=True),
    DetectionRule("space-at-start", _space_at_start, definitive=True),
    DetectionRule("known-slash-command", _known_slash, definitive=True),
    DetectionRule("absolute-path", _absolute_path, definitive=False),
    DetectionRule("unknown-slash", _unknown_slash, definitive=True),
    DetectionRule("shell-operators", _shell_operators, definitive=False),
    DetectionRule("env-variables", _env_variables, definitive=True),
    DetectionRule("shell-builtin", _shell_builtin, definitive=True),
    DetectionRule("single-prompt-ambiguous", _single_prompt_ambiguous, definitive=True),
    DetectionRule("all-nl-words", _all_nl_words, definitive=True),
    DetectionRule("question-sentence", _question, definitive=True),
    DetectionRule("request-sentence", _request, definitive=True),
    DetectionRule("ambiguous-command-with-nl", _ambiguous_command_with_nl, definitive=True),
    DetectionRule("command-exists", _command_exists, definitive=False),
    DetectionRule("structural-nl", _structural_nl, definitive=False),
    DetectionRule("unknown-command-with-nl", _unknown_command_with_nl, definitive=False),
    DetectionRule("command-like", _command_like, definitive=False),
    DetectionRule("fallback-nl", _fallback_nl, definitive=True),
)


def apply_rules(
    raw: str,
    *,
    known: bool | None = None,
    rules: tuple[DetectionRule, ...] = DETECTION_RULES,
) -> Detection:
    """Run the cascade and report the first rule that answers."""

    trimmed = raw.strip()
    first = first_word(trimmed)
    for rule in rules:
        mode = rule.test(raw, trimmed, first, known)
        if mode is not None:
            return Detection(mode=mode, rule=rule.name, definitive=rule.definitive)
    return Detection(mode=Mode.NATURAL_LANGUAGE, rule="fallback-nl", definitive=True)
