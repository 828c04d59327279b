"""Command-existence oracle with a per-session lookup cache."""

from __future__ import annotations

import asyncio
import re
import shutil
from typing import TypeAlias

from collections.abc import Callable

from loguru import logger

BUILTIN = "builtin"
DEFAULT_TIMEOUT_SECONDS = 0.5

COMMAND_WORD_RE = re.compile(r"^[A-Za-z0-9_-]+$")
ABSOLUTE_PATH_RE = re.compile(r"^/[A-Za-z0-9._-]+/[A-Za-z0-9._/-]+$")

# Builtins never show up on PATH.
SHELL_BUILTINS: frozenset[str] = frozenset({
    "cd",
    "export",
    "alias",
    "unalias",
    "source",
    ".",
    "eval",
    "exec",
    "exit",
    "return",
    "set",
    "unset",
    "readonly",
    "local",
    "declare",
    "typeset",
    "builtin",
    "command",
    "type",
    "hash",
    "pwd",
    "pushd",
    "popd",
})

Lookup: TypeAlias = Callable[[str], str | None]


def is_shell_builtin(word: str) -> bool:
    return word in SHELL_BUILTINS


class CommandOracle:
    """Answers "is this a command?" and remembers every answer.

    One instance is created per session and shared by the classifier and the
    shell collaborator. Entries are never invalidated. Concurrent lookups of
    the same uncached name share one in-flight task.
    """

    def __init__(self, *, lookup: Lookup = shutil.which, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._lookup = lookup
        self._timeout_seconds = timeout_seconds
        self._cache: dict[str, str | None] = {}
        self._inflight: dict[str, asyncio.Task[str | None]] = {}

    def cached(self, command: str) -> str | None:
        return self._cache.get(command)

    def is_cached(self, command: str) -> bool:
        return command in self._cache

    async def which(self, command: str) -> str | None:
        """Resolve ``command`` to a path, ``"builtin"``, or ``None``."""

        if command in self._cache:
            return self._cache[command]
        if is_shell_builtin(command):
            self._cache[command] = BUILTIN
            return BUILTIN

        task = self._inflight.get(command)
        if task is None:
            task = asyncio.ensure_future(self._resolve(command))
            self._inflight[command] = task
            task.add_done_callback(lambda _: self._inflight.pop(command, None))
        return await asyncio.shield(task)

    async def is_command(self, word: str) -> bool:
        if not (COMMAND_WORD_RE.match(word) or ABSOLUTE_PATH_RE.match(word)):
            return False
        if is_shell_builtin(word):
            return True
        return await self.which(word) is not None

    async def _resolve(self, command: str) -> str | None:
        try:
            path = await asyncio.wait_for(asyncio.to_thread(self._lookup, command), timeout=self._timeout_seconds)
        except TimeoutError:
            logger.debug("oracle.lookup.timeout command={} timeout={}s", command, self._timeout_seconds)
            path = None
        except Exception as exc:
            logger.debug("oracle.lookup.error command={} error={!r}", command, exc)
            path = None
        self._cache[command] = path
        return path
