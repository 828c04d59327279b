"""Configuration management for clam."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clam.errors import WorkspaceNotFoundError

LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CLAM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Mode detection
    mode_detection_enabled: bool = Field(default=True, description="Classify input as shell or natural language")
    which_timeout_seconds: float = Field(default=0.5, gt=0, description="Timeout for one command lookup")

    # Completion
    completion_timeout_seconds: float = Field(default=0.1, gt=0, description="Per-completer timeout")
    completion_max_results: int = Field(default=50, ge=1, description="Maximum completions per request")
    completion_debounce_seconds: float = Field(default=0.0, ge=0, description="Delay before computing completions")
    menu_max_visible: int = Field(default=8, ge=1, description="Rows shown in the completion menu")
    menu_value_width: int = Field(default=25, ge=1, description="Width of the value column")

    # History
    history_max_entries: int = Field(default=500, ge=1, description="Commands kept for recency scoring")
    history_max_age_seconds: float = Field(default=3600, gt=0, description="Age after which history is dropped")
    load_shell_history: bool = Field(default=True, description="Seed history from the user's shell history file")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(workspace_path: Path | None = None) -> Settings:
    """Load settings, reading ``.env`` from the workspace when one is given."""

    if workspace_path is None:
        return Settings()
    workspace = workspace_path.expanduser().resolve()
    if not workspace.is_dir():
        raise WorkspaceNotFoundError(f"Workspace not found: {workspace}")
    return Settings(_env_file=workspace / ".env")  # type: ignore[call-arg]
