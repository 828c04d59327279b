"""Command history for recency scoring."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from pathlib import Path

from loguru import logger

from clam.input.state import HistoryEntry

HISTORY_FILES: tuple[str, ...] = (".bash_history", ".zsh_history", ".history")
DEFAULT_MAX_ENTRIES = 500
DEFAULT_MAX_AGE_SECONDS = 3600

ZSH_EXTENDED_RE = re.compile(r"^: *\d+:\d+;(?P<command>.*)$")


def parse_history_line(line: str) -> str | None:
    """Command text of one history line, handling zsh ``: ts:0;cmd`` lines."""

    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    match = ZSH_EXTENDED_RE.match(stripped)
    if match is not None:
        return match.group("command").strip() or None
    return stripped


def extract_command(command_line: str) -> str:
    parts = command_line.split(maxsplit=1)
    return parts[0] if parts else ""


def parse_history_file(content: str, max_entries: int = 1000, *, now: datetime | None = None) -> list[HistoryEntry]:
    """Most recent ``max_entries`` commands in chronological order.

    Plain history files carry no timestamps, so entries are spaced one second
    apart counting back from ``now``.
    """

    now = now or datetime.now(UTC)
    entries: list[HistoryEntry] = []
    for line in reversed(content.splitlines()):
        if len(entries) >= max_entries:
            break
        command = parse_history_line(line)
        if command:
            entries.append(HistoryEntry(command=command, timestamp=now - timedelta(seconds=len(entries))))
    entries.reverse()
    return entries


def load_shell_history(max_entries: int = DEFAULT_MAX_ENTRIES, *, home: Path | None = None) -> list[HistoryEntry]:
    home = home or Path.home()
    for filename in HISTORY_FILES:
        path = home / filename
        if not path.is_file():
            continue
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.debug("history.load.error path={} error={!r}", path, exc)
            continue
        return parse_history_file(content, max_entries)
    return []


class HistoryProvider:
    """In-memory recent commands, pruned by size and age."""

    def __init__(
        self,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
    ) -> None:
        self._max_entries = max_entries
        self._max_age = timedelta(seconds=max_age_seconds)
        self._entries: list[HistoryEntry] = []

    def add(self, command: str, *, timestamp: datetime | None = None) -> None:
        self._entries.append(HistoryEntry(command=command, timestamp=timestamp or datetime.now(UTC)))
        if len(self._entries) > self._max_entries:
            self._entries = self._entries[-self._max_entries :]

    def entries(self) -> tuple[HistoryEntry, ...]:
        self._prune_old()
        return tuple(self._entries)

    def recent(self, n: int) -> tuple[HistoryEntry, ...]:
        self._prune_old()
        return tuple(self._entries[-n:]) if n > 0 else ()

    def clear(self) -> None:
        self._entries = []

    def load_from_shell(self, *, home: Path | None = None) -> int:
        self._entries = load_shell_history(self._max_entries, home=home)
        logger.debug("history.loaded entries={}", len(self._entries))
        return len(self._entries)

    def _prune_old(self) -> None:
        cutoff = datetime.now(UTC) - self._max_age
        self._entries = [entry for entry in self._entries if entry.timestamp > cutoff]
