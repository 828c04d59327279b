"""Input mode classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from clam.core.rules import DETECTION_RULES, Detection, DetectionRule, apply_rules, has_shell_operators
from clam.core.suggest import suggest_command
from clam.input.parser import first_word
from clam.types import Mode


class CommandLookup(Protocol):
    """Command-existence oracle used for the authoritative pass."""

    async def which(self, command: str) -> str | None: ...

    async def is_command(self, word: str) -> bool: ...


@dataclass(frozen=True)
class Classification:
    """Authoritative classification of one line."""

    mode: Mode
    rule: str
    definitive: bool
    suggestion: str | None = None


class ModeClassifier:
    """Routes a line to shell, agent, or local command.

    ``classify_sync`` is cheap and is meant for live coloring on every
    keystroke. ``classify`` confirms tentative answers with the oracle
    before a line is executed.
    """

    def __init__(
        self,
        oracle: CommandLookup,
        *,
        enabled: bool = True,
        rules: tuple[DetectionRule, ...] = DETECTION_RULES,
    ) -> None:
        self._oracle = oracle
        self._enabled = enabled
        self._rules = rules

    @property
    def enabled(self) -> bool:
        return self._enabled

    def detect(self, text: str) -> Detection:
        """Raw synchronous verdict, including which rule fired."""

        if not self._enabled:
            return Detection(mode=Mode.NATURAL_LANGUAGE, rule="disabled", definitive=True)
        return apply_rules(text, rules=self._rules)

    def classify_sync(self, text: str) -> Mode:
        mode = self.detect(text).mode
        if mode.is_authoritative_only:
            return Mode.NATURAL_LANGUAGE
        return mode

    async def classify(self, text: str) -> Mode:
        return (await self.classify_detailed(text)).mode

    async def classify_detailed(self, text: str) -> Classification:
        detection = self.detect(text)
        if detection.definitive:
            return Classification(mode=detection.mode, rule=detection.rule, definitive=True)

        target = first_word(text.strip())
        known = await self._is_command(target)
        resolved = apply_rules(text, known=known, rules=self._rules)
        logger.debug(
            "classifier.resolve rule={} tentative={} known={} mode={}",
            detection.rule,
            detection.mode.value,
            known,
            resolved.mode.value,
        )
        suggestion = suggest_command(target) if resolved.mode is Mode.INVALID else None
        return Classification(
            mode=resolved.mode,
            rule=resolved.rule,
            definitive=False,
            suggestion=suggestion,
        )

    async def _is_command(self, word: str) -> bool:
        try:
            return await self._oracle.is_command(word)
        except Exception as exc:
            logger.debug("classifier.oracle.error word={} error={!r}", word, exc)
            return False


def is_explicit_shell(text: str) -> bool:
    return text.startswith("!")


def is_explicit_nl(text: str) -> bool:
    return text.startswith("?")


def strip_shell_trigger(text: str) -> str:
    return text[1:] if is_explicit_shell(text) else text


def strip_nl_trigger(text: str) -> str:
    return text[1:] if is_explicit_nl(text) else text


__all__ = [
    "Classification",
    "CommandLookup",
    "ModeClassifier",
    "has_shell_operators",
    "is_explicit_nl",
    "is_explicit_shell",
    "strip_nl_trigger",
    "strip_shell_trigger",
]
