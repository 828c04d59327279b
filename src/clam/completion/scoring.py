"""Completion ranking.

A score combines how well the typed prefix matches, how recently the value
was used, and a small penalty for long values.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import UTC, datetime

from clam.completion.types import Completion
from clam.input.state import HistoryEntry

MAX_SCORE = 100
EMPTY_PREFIX_SCORE = 50
MAX_RECENCY_BONUS = 15
RECENCY_WINDOW_SECONDS = 60 * 60


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def prefix_score(prefix: str, value: str) -> int:
    """100 for an exact match, 80-99 for a prefix match, 0 otherwise."""

    if not prefix:
        return EMPTY_PREFIX_SCORE

    lowered_prefix = prefix.lower()
    lowered_value = value.lower()
    if lowered_value == lowered_prefix:
        return MAX_SCORE
    if lowered_value.startswith(lowered_prefix):
        coverage = len(lowered_prefix) / len(lowered_value)
        return _round(80 + coverage * 19)
    return 0


def recency_bonus(value: str, history: Iterable[HistoryEntry], *, now: datetime | None = None) -> int:
    matches = [entry.timestamp for entry in history if entry.command == value]
    if not matches:
        return 0

    now = now or datetime.now(UTC)
    elapsed = (now - max(matches)).total_seconds()
    if elapsed > RECENCY_WINDOW_SECONDS:
        return 1
    decay = 1 - max(0.0, elapsed) / RECENCY_WINDOW_SECONDS
    return _round(1 + decay * (MAX_RECENCY_BONUS - 1))


def length_penalty(value: str) -> int:
    return _round(math.log2(len(value) + 1))


def score_completion(
    prefix: str,
    value: str,
    history: Iterable[HistoryEntry] = (),
    *,
    now: datetime | None = None,
) -> int:
    base = prefix_score(prefix, value)
    if base == 0:
        return 0
    total = base + recency_bonus(value, history, now=now) - length_penalty(value)
    return max(0, min(MAX_SCORE, total))


def sort_completions(completions: Iterable[Completion]) -> list[Completion]:
    """New list ordered by group, then by descending score."""

    return sorted(completions, key=lambda item: (item.group, -item.score))
