import io
from dataclasses import dataclass, field

import pytest
from rich.console import Console

from clam.cli.interactive import ChatLoop, build_session
from clam.cli.render import Renderer
from clam.config import Settings
from clam.core.router import ExecResult
from clam.types import Mode


@dataclass
class FakeShell:
    commands: list[str] = field(default_factory=list)

    async def exec(self, command: str, cwd: str | None = None) -> ExecResult:
        self.commands.append(command)
        return ExecResult(stdout=f"out:{command}\n", stderr="", exit_code=0)


@pytest.fixture
def loop(tmp_path) -> tuple[ChatLoop, FakeShell, io.StringIO]:
    settings = Settings(load_shell_history=False)
    session = build_session(settings, str(tmp_path))
    shell = FakeShell()
    session.shell = shell
    output = io.StringIO()
    renderer = Renderer(Console(file=output, width=120, color_system=None))
    return ChatLoop(session, renderer), shell, output


@pytest.mark.asyncio
async def test_shell_line_runs_and_is_remembered(loop) -> None:
    chat, shell, output = loop
    result = await chat.handle_line("!echo hi")
    assert result.mode is Mode.SHELL
    assert shell.commands == ["echo hi"]
    assert "out:echo hi" in output.getvalue()
    assert [entry.command for entry in chat.session.history.entries()] == ["echo hi"]


@pytest.mark.asyncio
async def test_quit_requests_exit(loop) -> None:
    chat, _, output = loop
    await chat.handle_line("/quit")
    assert chat.commands.exit_requested
    assert "Goodbye!" in output.getvalue()


@pytest.mark.asyncio
async def test_help_lists_slash_commands(loop) -> None:
    chat, _, output = loop
    await chat.handle_line("/help")
    text = output.getvalue()
    assert "/history" in text
    assert "/quit" in text


@pytest.mark.asyncio
async def test_unknown_slash_is_warned(loop) -> None:
    chat, shell, output = loop
    await chat.handle_line("/nope")
    assert "Warning:" in output.getvalue()
    assert "Unknown command: /nope" in output.getvalue()
    assert shell.commands == []


@pytest.mark.asyncio
async def test_ambiguous_line_asks_before_running(loop, monkeypatch: pytest.MonkeyPatch) -> None:
    chat, shell, _ = loop
    asked: list[str] = []

    async def _confirm(command: str) -> bool:
        asked.append(command)
        return True

    monkeypatch.setattr(chat, "confirm_shell", _confirm)
    result = await chat.handle_line("who")
    assert asked == ["who"]
    assert shell.commands == ["who"]
    assert result.mode is Mode.SHELL


@pytest.mark.asyncio
async def test_declined_ambiguous_line_goes_to_agent(loop, monkeypatch: pytest.MonkeyPatch) -> None:
    chat, shell, output = loop

    async def _decline(command: str) -> bool:
        return False

    monkeypatch.setattr(chat, "confirm_shell", _decline)
    result = await chat.handle_line("date")
    assert shell.commands == []
    assert result.mode is Mode.NATURAL_LANGUAGE
    assert "not sent" in output.getvalue()


@pytest.mark.asyncio
async def test_local_status_and_version(loop) -> None:
    chat, _, output = loop
    await chat.handle_line("/version")
    await chat.handle_line("/status")
    text = output.getvalue()
    assert "clam 0.1.0" in text
    assert "completers: command, slash, entity" in text
