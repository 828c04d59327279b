import importlib
from pathlib import Path

import pytest
from typer.testing import CliRunner

cli_app_module = importlib.import_module("clam.cli.app")


@pytest.fixture(autouse=True)
def _quiet(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLAM_LOAD_SHELL_HISTORY", "false")
    monkeypatch.setattr(cli_app_module, "configure_logging", lambda **_: None)


def test_classify_prints_mode_and_rule() -> None:
    result = CliRunner().invoke(cli_app_module.app, ["classify", "/help"])
    assert result.exit_code == 0
    assert "slash" in result.output
    assert "rule=known-slash-command" in result.output


def test_classify_forced_nl() -> None:
    result = CliRunner().invoke(cli_app_module.app, ["classify", "?what is this"])
    assert result.exit_code == 0
    assert "nl" in result.output
    assert "rule=explicit-nl" in result.output


def test_complete_slash_commands() -> None:
    result = CliRunner().invoke(cli_app_module.app, ["complete", "/he", "--mode", "slash"])
    assert result.exit_code == 0
    assert "/help" in result.output
    assert "/history" not in result.output


def test_complete_files_in_workspace(tmp_path: Path) -> None:
    (tmp_path / "notes.md").write_text("")
    result = CliRunner().invoke(
        cli_app_module.app,
        ["complete", "cat no", "--mode", "shell", "--workspace", str(tmp_path)],
    )
    assert result.exit_code == 0
    assert "notes.md" in result.output


def test_complete_nothing_to_offer() -> None:
    result = CliRunner().invoke(cli_app_module.app, ["complete", "tell me", "--mode", "nl"])
    assert result.exit_code == 0
    assert "(no completions)" in result.output


def test_chat_command_invokes_interactive_runner(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    called: dict[str, object] = {}

    async def _fake_run_chat(settings, workspace=None, renderer=None) -> None:
        called["settings"] = settings
        called["workspace"] = workspace

    monkeypatch.setattr(cli_app_module, "run_chat", _fake_run_chat)
    result = CliRunner().invoke(cli_app_module.app, ["chat", "--workspace", str(tmp_path)])
    assert result.exit_code == 0
    assert called["workspace"] == tmp_path


def test_chat_is_the_default_command(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"run": False}

    async def _fake_run_chat(settings, workspace=None, renderer=None) -> None:
        called["run"] = True

    monkeypatch.setattr(cli_app_module, "run_chat", _fake_run_chat)
    result = CliRunner().invoke(cli_app_module.app, [])
    assert result.exit_code == 0
    assert called["run"] is True


def test_missing_workspace_exits_with_error(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli_app_module.app, ["classify", "ls", "--workspace", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "Workspace not found" in result.output
