"""Completion manager: registry and concurrent fan-out over completers."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

from loguru import logger

from clam.completion.scoring import sort_completions
from clam.completion.types import Completer, Completion
from clam.errors import DuplicateCompleterError
from clam.input.state import InputState

DEFAULT_MAX_RESULTS = 50
DEFAULT_TIMEOUT_SECONDS = 0.1


class CompletionManager:
    """Runs the relevant completers for a state and merges their results."""

    def __init__(self) -> None:
        self._completers: dict[str, Completer] = {}

    def register(self, completer: Completer) -> None:
        if completer.name in self._completers:
            raise DuplicateCompleterError(completer.name)
        self._completers[completer.name] = completer

    def unregister(self, name: str) -> None:
        self._completers.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._completers

    def get(self, name: str) -> Completer | None:
        return self._completers.get(name)

    def completers(self) -> list[Completer]:
        return list(self._completers.values())

    def relevant(self, state: InputState) -> list[Completer]:
        relevant: list[Completer] = []
        for completer in self._completers.values():
            try:
                if completer.is_relevant(state):
                    relevant.append(completer)
            except Exception:
                logger.exception("completion.relevance.error name={}", completer.name)
        return relevant

    async def get_completions(
        self,
        state: InputState,
        *,
        max_results: int = DEFAULT_MAX_RESULTS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> list[Completion]:
        """Merged, deduplicated and ranked completions, at most ``max_results``."""

        completers = self.relevant(state)
        if not completers:
            return []

        batches = await asyncio.gather(*(self._run(completer, state, timeout) for completer in completers))
        merged = _deduplicate(item for batch in batches for item in batch)
        return sort_completions(merged)[:max_results]

    async def _run(self, completer: Completer, state: InputState, timeout: float) -> list[Completion]:
        start = time.monotonic()
        try:
            return await asyncio.wait_for(completer.get_completions(state), timeout=timeout)
        except TimeoutError:
            logger.debug("completion.completer.timeout name={} timeout={}s", completer.name, timeout)
        except Exception:
            logger.exception("completion.completer.error name={}", completer.name)
        finally:
            logger.debug(
                "completion.completer.end name={} duration={:.3f}ms", completer.name, (time.monotonic() - start) * 1000
            )
        return []


def _deduplicate(completions: Iterable[Completion]) -> list[Completion]:
    best: dict[str, Completion] = {}
    for completion in completions:
        existing = best.get(completion.value)
        if existing is None or completion.score > existing.score:
            best[completion.value] = completion
    return list(best.values())
