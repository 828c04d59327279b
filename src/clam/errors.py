"""Application-level exception types for clam."""

from __future__ import annotations


class ClamError(Exception):
    """Base exception for clam."""


class ConfigurationError(ClamError):
    """Base exception for configuration and startup validation errors."""


class WorkspaceNotFoundError(ConfigurationError):
    """Raised when the configured workspace path does not exist."""


class DuplicateCompleterError(ClamError, ValueError):
    """Raised when a completer name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Completer already registered: {name}")
        self.name = name


class UnknownSlashCommandError(ClamError, LookupError):
    """Raised when a slash command name has no local handler."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: /{name}")
        self.name = name
