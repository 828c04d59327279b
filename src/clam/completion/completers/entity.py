"""File and ``@`` entity completion."""

from __future__ import annotations

import asyncio
from typing import TypeAlias

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from clam.completion.scoring import score_completion
from clam.completion.trigger import TriggerResult, TriggerType, detect_trigger
from clam.completion.types import COMPLETION_ICONS, Completer, Completion, CompletionGroup
from clam.input.state import InputState
from clam.types import Mode

MAX_ENTRIES = 50
IGNORED_NAMES = frozenset({"node_modules"})


@dataclass(frozen=True)
class DirEntry:
    name: str
    is_dir: bool


ListDirectory: TypeAlias = Callable[[Path, str], Iterable[DirEntry]]


def list_directory(path: Path, prefix: str = "") -> list[DirEntry]:
    """Visible entries of ``path`` whose names start with ``prefix``, sorted by name and capped.

    The prefix is matched case-insensitively before the cap so a late entry is
    still reachable once enough of its name is typed.
    """

    lowered = prefix.lower()
    entries: list[DirEntry] = []
    for child in sorted(path.iterdir(), key=lambda item: item.name):
        if child.name.startswith(".") or child.name in IGNORED_NAMES:
            continue
        if not child.name.lower().startswith(lowered):
            continue
        entries.append(DirEntry(name=child.name, is_dir=child.is_dir()))
        if len(entries) >= MAX_ENTRIES:
            break
    return entries


def split_query(query: str) -> tuple[str, str]:
    """Split ``src/ma`` into the directory part ``src/`` and the name filter ``ma``."""

    slash = query.rfind("/")
    if slash == -1:
        return "", query
    return query[: slash + 1], query[slash + 1 :]


class EntityCompleter(Completer):
    """Completes paths after ``@`` and in shell argument position."""

    name = "entity"

    def __init__(self, lister: ListDirectory = list_directory) -> None:
        self._list_directory = lister

    def is_relevant(self, state: InputState) -> bool:
        if state.is_entity_trigger:
            return True
        trigger = detect_trigger(state)
        return trigger.type is TriggerType.ENTITY or (
            state.mode is Mode.SHELL and trigger.type is TriggerType.ARGUMENT
        )

    async def get_completions(self, state: InputState) -> list[Completion]:
        trigger = detect_trigger(state)
        if trigger.type is TriggerType.ENTITY:
            is_entity = True
        elif trigger.type is TriggerType.ARGUMENT:
            is_entity = False
        elif state.is_entity_trigger:
            is_entity = True
            trigger = TriggerResult(TriggerType.ENTITY, prefix=state.prefix.removeprefix("@"))
        else:
            return []

        directory, name_filter = split_query(trigger.prefix)
        base = Path(state.cwd) / directory if directory else Path(state.cwd)
        try:
            entries = await asyncio.to_thread(lambda: list(self._list_directory(base, name_filter)))
        except OSError as exc:
            logger.debug("completion.entity.list_error path={} error={!r}", base, exc)
            return []

        completions: list[Completion] = []
        for entry in entries[:MAX_ENTRIES]:
            score = score_completion(name_filter, entry.name, state.history)
            if score <= 0:
                continue
            path = f"{directory}{entry.name}{'/' if entry.is_dir else ''}"
            completions.append(
                Completion(
                    value=f"@{path}" if is_entity else path,
                    group=CompletionGroup.ENTITY if is_entity else CompletionGroup.FILE,
                    score=score,
                    source=self.name,
                    display=path,
                    description="directory" if entry.is_dir else "file",
                    icon=COMPLETION_ICONS["directory" if entry.is_dir else "file"],
                )
            )
        return completions
