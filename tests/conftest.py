from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from clam.core.classifier import ModeClassifier
from clam.core.oracle import CommandOracle

KNOWN_COMMANDS = frozenset({"git", "ls", "grep", "cat", "echo", "node", "npm", "make", "python", "who", "date"})


def lookup_from(known: Iterable[str]) -> Callable[[str], str | None]:
    names = frozenset(known)

    def lookup(name: str) -> str | None:
        if name.startswith("/"):
            return name if name in names else None
        return f"/usr/bin/{name}" if name in names else None

    return lookup


@pytest.fixture
def oracle() -> CommandOracle:
    return CommandOracle(lookup=lookup_from(KNOWN_COMMANDS))


@pytest.fixture
def classifier(oracle: CommandOracle) -> ModeClassifier:
    return ModeClassifier(oracle)


@pytest.fixture
def make_oracle() -> Callable[..., CommandOracle]:
    def factory(known: Iterable[str] = KNOWN_COMMANDS, **kwargs: float) -> CommandOracle:
        return CommandOracle(lookup=lookup_from(known), **kwargs)

    return factory
