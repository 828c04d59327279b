"""Typo suggestions for commands that do not exist."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 20

COMMON_COMMANDS: tuple[str, ...] = (
    "ls", "cd", "git", "npm", "pnpm", "node", "cat", "grep", "find", "rm",
    "cp", "mv", "mkdir", "rmdir", "echo", "curl", "wget", "docker", "kubectl",
    "python", "python3", "pip", "brew", "apt", "yum", "ssh", "scp", "tar",
    "unzip", "zip", "make", "gcc", "go", "cargo", "rust", "vim", "nano",
    "code", "man", "which", "where", "whoami", "date", "time", "history",
    "clear", "pwd", "env", "export", "source", "chmod", "chown", "ps", "kill",
    "top", "htop", "df", "du", "head", "tail", "less", "more", "sort", "uniq",
    "wc", "diff", "sed", "awk", "xargs", "tee",
)  # fmt: skip


def suggest_command(word: str, candidates: tuple[str, ...] = COMMON_COMMANDS) -> str | None:
    """Closest common command within ``max(2, len(word) // 2)`` edits."""

    lowered = word.lower()
    if not MIN_WORD_LENGTH <= len(lowered) <= MAX_WORD_LENGTH:
        return None
    if lowered in candidates:
        return None

    max_distance = max(2, len(lowered) // 2)
    best: str | None = None
    best_distance = max_distance + 1
    for candidate in candidates:
        distance = Levenshtein.distance(lowered, candidate, score_cutoff=max_distance)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best
