"""CLI main module for clam."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import typer

from clam.cli.interactive import build_session, run_chat
from clam.cli.render import Renderer
from clam.config import Settings, load_settings
from clam.errors import ConfigurationError
from clam.logging_utils import configure_logging
from clam.types import Mode

app = typer.Typer(
    name="clam",
    help="A shell that understands what you mean.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _settings(workspace: Path | None) -> Settings:
    try:
        settings = load_settings(workspace)
    except ConfigurationError as exc:
        Renderer().error(str(exc))
        raise typer.Exit(1) from exc
    configure_logging(profile="default", level=settings.log_level)
    return settings


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        # Default to chat mode
        chat(workspace=None)


@app.command()
def chat(
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Workspace root"),  # noqa: B008
) -> None:
    """Start an interactive session."""

    settings = _settings(workspace)
    configure_logging(profile="chat", level=settings.log_level)
    asyncio.run(run_chat(settings, workspace))


@app.command()
def classify(
    text: str = typer.Argument(..., help="Input line to classify"),
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Workspace root"),  # noqa: B008
) -> None:
    """Show how a line would be routed."""

    settings = _settings(workspace)
    session = build_session(settings.model_copy(update={"load_shell_history": False}), _cwd(workspace))
    result = asyncio.run(session.classifier.classify_detailed(text))
    Renderer().classification(text, result)


@app.command()
def complete(
    text: str = typer.Argument(..., help="Input line to complete"),
    cursor: int | None = typer.Option(None, "--cursor", "-c", help="Cursor position (default: end of line)"),
    mode: Mode | None = typer.Option(None, "--mode", "-m", help="Input mode (default: detected)"),  # noqa: B008
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Workspace root"),  # noqa: B008
) -> None:
    """List ranked completions for a line."""

    settings = _settings(workspace)
    session = build_session(settings.model_copy(update={"load_shell_history": False}), _cwd(workspace))
    integration = session.integration
    position = len(text) if cursor is None else cursor
    resolved = mode or integration.refresh_mode(text)
    asyncio.run(integration.update_completions(text, position, resolved))
    Renderer().completions(integration.menu.completions)


def _cwd(workspace: Path | None) -> str:
    return str(workspace.resolve()) if workspace is not None else os.getcwd()
