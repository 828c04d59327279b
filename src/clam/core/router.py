"""Dispatch of a submitted line to shell, agent, or local command."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from loguru import logger

from clam.commands import KNOWN_SLASH_COMMANDS, parse_slash_command
from clam.core.classifier import ModeClassifier, strip_nl_trigger, strip_shell_trigger
from clam.errors import UnknownSlashCommandError
from clam.types import Mode


@dataclass(frozen=True)
class ExecResult:
    """Outcome of one shell command."""

    stdout: str
    stderr: str
    exit_code: int
    signal: str | None = None


class RouteKind(str, Enum):
    SHELL = "shell"
    AGENT = "agent"
    SLASH = "slash"
    CONFIRM = "confirm"
    INVALID = "invalid"
    NOOP = "noop"


class ShellExecutor(Protocol):
    async def exec(self, command: str, cwd: str | None = None) -> ExecResult: ...


class AgentClient(Protocol):
    async def prompt(self, text: str) -> str: ...


class SlashExecutor(Protocol):
    async def run(self, name: str, args: str) -> str: ...


@dataclass(frozen=True)
class RouteResult:
    """Routing outcome for one submitted line."""

    mode: Mode
    kind: RouteKind
    output: str = ""
    error: str = ""
    suggestion: str | None = None
    exit_code: int | None = None
    elapsed_ms: int = 0

    @property
    def needs_confirmation(self) -> bool:
        return self.kind is RouteKind.CONFIRM

    @property
    def ok(self) -> bool:
        return not self.error


class InputRouter:
    """Classifies a submitted line and hands it to the right collaborator."""

    def __init__(
        self,
        classifier: ModeClassifier,
        *,
        shell: ShellExecutor | None = None,
        agent: AgentClient | None = None,
        slash: SlashExecutor | None = None,
        cwd: str | None = None,
    ) -> None:
        self._classifier = classifier
        self._shell = shell
        self._agent = agent
        self._slash = slash
        self.cwd = cwd

    async def route(self, raw: str) -> RouteResult:
        if not raw.strip():
            return RouteResult(mode=Mode.NATURAL_LANGUAGE, kind=RouteKind.NOOP)

        classification = await self._classifier.classify_detailed(raw)
        mode = classification.mode
        logger.info("router.route mode={} rule={}", mode.value, classification.rule)

        if mode is Mode.SHELL:
            return await self._run_shell(strip_shell_trigger(raw).strip())
        if mode is Mode.NATURAL_LANGUAGE:
            return await self._run_agent(strip_nl_trigger(raw).strip())
        if mode is Mode.SLASH:
            return await self._run_slash(raw)
        if mode is Mode.AMBIGUOUS:
            return RouteResult(mode=mode, kind=RouteKind.CONFIRM, output=raw.strip())

        word = raw.split(maxsplit=1)[0] if raw.strip() else ""
        error = f"Command not found: {word}"
        if classification.suggestion:
            error = f"{error} (did you mean '{classification.suggestion}'?)"
        return RouteResult(mode=mode, kind=RouteKind.INVALID, error=error, suggestion=classification.suggestion)

    async def _run_shell(self, command: str) -> RouteResult:
        if self._shell is None:
            return RouteResult(mode=Mode.SHELL, kind=RouteKind.SHELL, error="No shell executor configured")
        start = time.monotonic()
        try:
            result = await self._shell.exec(command, cwd=self.cwd)
        except Exception as exc:
            logger.exception("router.shell.error command={}", command)
            return RouteResult(mode=Mode.SHELL, kind=RouteKind.SHELL, error=f"{exc!s}", elapsed_ms=_elapsed_ms(start))
        return RouteResult(
            mode=Mode.SHELL,
            kind=RouteKind.SHELL,
            output=result.stdout,
            error=result.stderr if result.exit_code != 0 else "",
            exit_code=result.exit_code,
            elapsed_ms=_elapsed_ms(start),
        )

    async def _run_agent(self, text: str) -> RouteResult:
        if self._agent is None:
            return RouteResult(
                mode=Mode.NATURAL_LANGUAGE, kind=RouteKind.AGENT, error="No agent attached; prompt not sent"
            )
        start = time.monotonic()
        try:
            stop_reason = await self._agent.prompt(text)
        except Exception as exc:
            logger.exception("router.agent.error")
            return RouteResult(
                mode=Mode.NATURAL_LANGUAGE, kind=RouteKind.AGENT, error=f"{exc!s}", elapsed_ms=_elapsed_ms(start)
            )
        return RouteResult(
            mode=Mode.NATURAL_LANGUAGE, kind=RouteKind.AGENT, output=stop_reason, elapsed_ms=_elapsed_ms(start)
        )

    async def _run_slash(self, raw: str) -> RouteResult:
        name, args = parse_slash_command(raw)
        if name not in KNOWN_SLASH_COMMANDS:
            logger.warning("router.slash.unknown name={}", name)
            return RouteResult(mode=Mode.SLASH, kind=RouteKind.SLASH, error=f"Unknown command: /{name}")
        if self._slash is None:
            return RouteResult(mode=Mode.SLASH, kind=RouteKind.SLASH, error=f"No handler for /{name}")
        try:
            output = await self._slash.run(name, args)
        except UnknownSlashCommandError as exc:
            logger.warning("router.slash.unhandled name={}", name)
            return RouteResult(mode=Mode.SLASH, kind=RouteKind.SLASH, error=str(exc))
        except Exception as exc:
            logger.exception("router.slash.error name={}", name)
            return RouteResult(mode=Mode.SLASH, kind=RouteKind.SLASH, error=f"{exc!s}")
        return RouteResult(mode=Mode.SLASH, kind=RouteKind.SLASH, output=output)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
