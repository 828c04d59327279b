"""Interactive chat session."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.styles import Style

import clam
from clam.cli.prompt import PROMPT_STYLE, ManagerCompleter, ModeLexer
from clam.cli.render import Renderer
from clam.cli.shell import SubprocessShell
from clam.commands import SLASH_COMMANDS
from clam.completion.history import HistoryProvider
from clam.completion.integration import CompletionIntegration, default_manager
from clam.config import Settings
from clam.core.classifier import ModeClassifier, strip_shell_trigger
from clam.core.oracle import CommandOracle
from clam.core.router import InputRouter, RouteResult
from clam.errors import UnknownSlashCommandError
from clam.types import Mode

CONFIRM_ANSWERS = frozenset({"y", "yes"})


@dataclass
class Session:
    """Everything one interactive session shares."""

    settings: Settings
    cwd: str
    oracle: CommandOracle
    classifier: ModeClassifier
    history: HistoryProvider
    integration: CompletionIntegration
    shell: SubprocessShell = field(default_factory=SubprocessShell)


def build_session(settings: Settings, cwd: str | None = None) -> Session:
    cwd = cwd or os.getcwd()
    oracle = CommandOracle(timeout_seconds=settings.which_timeout_seconds)
    classifier = ModeClassifier(oracle, enabled=settings.mode_detection_enabled)
    history = HistoryProvider(
        max_entries=settings.history_max_entries,
        max_age_seconds=settings.history_max_age_seconds,
    )
    if settings.load_shell_history:
        history.load_from_shell()
    integration = CompletionIntegration(
        default_manager(),
        classifier=classifier,
        history=history,
        cwd=cwd,
        max_visible=settings.menu_max_visible,
        value_width=settings.menu_value_width,
        max_results=settings.completion_max_results,
        timeout_seconds=settings.completion_timeout_seconds,
        debounce_seconds=settings.completion_debounce_seconds,
    )
    return Session(
        settings=settings,
        cwd=cwd,
        oracle=oracle,
        classifier=classifier,
        history=history,
        integration=integration,
    )


class LocalCommands:
    """Handlers for slash commands run inside the client."""

    def __init__(self, session: Session, renderer: Renderer) -> None:
        self._session = session
        self._renderer = renderer
        self.exit_requested = False

    async def run(self, name: str, args: str) -> str:
        handler = getattr(self, f"_cmd_{name}", None)
        if handler is None:
            raise UnknownSlashCommandError(name)
        return await handler(args)

    async def _cmd_help(self, args: str) -> str:
        width = max(len(command.trigger) for command in SLASH_COMMANDS)
        return "\n".join(f"{command.trigger.ljust(width)}  {command.description}" for command in SLASH_COMMANDS)

    async def _cmd_clear(self, args: str) -> str:
        self._renderer.console.clear()
        return ""

    async def _cmd_config(self, args: str) -> str:
        settings = self._session.settings.model_dump()
        return "\n".join(f"{key} = {value!r}" for key, value in sorted(settings.items()))

    async def _cmd_history(self, args: str) -> str:
        limit = int(args) if args.isdigit() else 20
        entries = self._session.history.recent(limit)
        return "\n".join(entry.command for entry in entries) or "(no history)"

    async def _cmd_status(self, args: str) -> str:
        integration = self._session.integration
        return "\n".join([
            f"cwd: {self._session.cwd}",
            f"mode: {integration.mode.value}",
            f"mode detection: {'on' if self._session.classifier.enabled else 'off'}",
            f"completers: {', '.join(item.name for item in integration.manager.completers())}",
        ])

    async def _cmd_mode(self, args: str) -> str:
        return f"current mode: {self._session.integration.mode.value}"

    async def _cmd_shell(self, args: str) -> str:
        if not args:
            return "usage: /shell <command>"
        result = await self._session.shell.exec(args, cwd=self._session.cwd)
        self._session.history.add(args)
        return result.stdout + result.stderr

    async def _cmd_edit(self, args: str) -> str:
        editor = os.environ.get("EDITOR", "vi")
        command = f"{editor} {args}".strip()
        result = await self._session.shell.exec(command, cwd=self._session.cwd)
        return result.stderr

    async def _cmd_version(self, args: str) -> str:
        return f"clam {clam.__version__}"

    async def _cmd_debug(self, args: str) -> str:
        self._renderer.toggle_debug()
        return ""

    async def _cmd_quit(self, args: str) -> str:
        self.exit_requested = True
        return "Goodbye!"

    async def _cmd_exit(self, args: str) -> str:
        return await self._cmd_quit(args)


class ChatLoop:
    """Reads lines, routes them, and renders the outcome."""

    def __init__(self, session: Session, renderer: Renderer) -> None:
        self.session = session
        self.renderer = renderer
        self.commands = LocalCommands(session, renderer)
        self.router = InputRouter(
            session.classifier,
            shell=session.shell,
            slash=self.commands,
            cwd=session.cwd,
        )
        self._prompt: PromptSession[str] | None = None

    def _prompt_session(self) -> PromptSession[str]:
        if self._prompt is None:
            self._prompt = PromptSession(
                history=InMemoryHistory(),
                lexer=ModeLexer(self.session.classifier),
                completer=ManagerCompleter(self.session.integration),
                complete_while_typing=True,
                style=Style.from_dict(PROMPT_STYLE),
            )
        return self._prompt

    async def read_line(self, message: str) -> str:
        with patch_stdout(raw=True):
            return await self._prompt_session().prompt_async(message)

    async def confirm_shell(self, command: str) -> bool:
        answer = await self.read_line(f"Run '{command}' as a shell command? [y/N] ")
        return answer.strip().lower() in CONFIRM_ANSWERS

    async def run(self) -> None:
        self.renderer.welcome()
        self.renderer.info(f"[bold]Working directory:[/bold] [cyan]{self.session.cwd}[/cyan]")
        while not self.commands.exit_requested:
            try:
                line = await self.read_line("> ")
            except (KeyboardInterrupt, EOFError):
                self.renderer.info("Goodbye!")
                break
            if not line.strip():
                continue
            await self.handle_line(line)

    async def handle_line(self, line: str) -> RouteResult:
        self.session.integration.reset()
        result = await self.router.route(line)
        if result.needs_confirmation:
            result = await self._confirm(result)
        if result.mode is Mode.SHELL and result.exit_code is not None:
            self.session.history.add(strip_shell_trigger(line.strip()).strip())
        self.renderer.route_result(result)
        return result

    async def _confirm(self, pending: RouteResult) -> RouteResult:
        if await self.confirm_shell(pending.output):
            return await self.router.route(f"!{pending.output}")
        return await self.router.route(f"?{pending.output}")


async def run_chat(settings: Settings, workspace: Path | None = None, renderer: Renderer | None = None) -> None:
    cwd = str(workspace.resolve()) if workspace is not None else os.getcwd()
    session = build_session(settings, cwd)
    logger.info("chat.start cwd={} history={}", cwd, len(session.history.entries()))
    await ChatLoop(session, renderer or Renderer()).run()
    logger.info("chat.end")
