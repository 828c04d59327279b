"""Shared enums and data types."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """How one line of input should be interpreted."""

    SHELL = "shell"
    NATURAL_LANGUAGE = "nl"
    SLASH = "slash"
    AMBIGUOUS = "ambiguous"
    INVALID = "invalid"

    @property
    def is_authoritative_only(self) -> bool:
        """Modes that only the oracle-backed pass may report."""
        return self in (Mode.AMBIGUOUS, Mode.INVALID)
