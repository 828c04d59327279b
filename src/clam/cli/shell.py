"""Subprocess-backed shell executor."""

from __future__ import annotations

import asyncio
import signal

from loguru import logger

from clam.core.router import ExecResult

DEFAULT_COMMAND_TIMEOUT_SECONDS = 300


class SubprocessShell:
    """Runs one command line through ``bash -c``."""

    def __init__(self, *, shell: str = "bash", timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS) -> None:
        self._shell = shell
        self._timeout_seconds = timeout_seconds

    async def exec(self, command: str, cwd: str | None = None) -> ExecResult:
        logger.info("shell.exec.start command={!r} cwd={}", command, cwd)
        process = await asyncio.create_subprocess_exec(
            self._shell,
            "-c",
            command,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            async with asyncio.timeout(self._timeout_seconds):
                stdout_bytes, stderr_bytes = await process.communicate()
        except TimeoutError:
            process.kill()
            await process.wait()
            logger.warning("shell.exec.timeout command={!r} timeout={}s", command, self._timeout_seconds)
            return ExecResult(
                stdout="", stderr=f"timed out after {self._timeout_seconds}s", exit_code=-1, signal="SIGKILL"
            )

        returncode = process.returncode if process.returncode is not None else -1
        signal_name = signal.Signals(-returncode).name if returncode < 0 else None
        logger.info("shell.exec.end command={!r} exit_code={}", command, returncode)
        return ExecResult(
            stdout=(stdout_bytes or b"").decode("utf-8", errors="replace"),
            stderr=(stderr_bytes or b"").decode("utf-8", errors="replace"),
            exit_code=returncode,
            signal=signal_name,
        )
