from pathlib import Path

import pytest
from pydantic import ValidationError

from clam.config import Settings, load_settings
from clam.errors import WorkspaceNotFoundError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("CLAM_LOG_LEVEL", "CLAM_MENU_MAX_VISIBLE", "CLAM_MODE_DETECTION_ENABLED"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings()
    assert settings.mode_detection_enabled is True
    assert settings.which_timeout_seconds == 0.5
    assert settings.completion_timeout_seconds == 0.1
    assert settings.completion_max_results == 50
    assert settings.menu_max_visible == 8
    assert settings.menu_value_width == 25
    assert settings.history_max_entries == 500
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLAM_MENU_MAX_VISIBLE", "4")
    monkeypatch.setenv("CLAM_MODE_DETECTION_ENABLED", "false")
    monkeypatch.setenv("CLAM_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.menu_max_visible == 4
    assert settings.mode_detection_enabled is False
    assert settings.log_level == "DEBUG"


def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLAM_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()


def test_load_settings_reads_workspace_env(tmp_path: Path) -> None:
    workspace = tmp_path / "project"
    workspace.mkdir()
    (workspace / ".env").write_text("CLAM_COMPLETION_MAX_RESULTS=7\n")
    assert load_settings(workspace).completion_max_results == 7


def test_load_settings_missing_workspace(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceNotFoundError):
        load_settings(tmp_path / "missing")
