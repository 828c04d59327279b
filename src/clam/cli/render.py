"""CLI renderer for clam."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from clam.completion.types import Completion
from clam.core.classifier import Classification
from clam.core.router import RouteKind, RouteResult
from clam.input.renderer import render_line
from clam.types import Mode

MODE_STYLES: dict[str, str] = {
    "shell": "green",
    "nl": "cyan",
    "slash": "magenta",
    "ambiguous": "yellow",
    "invalid": "red",
}


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._show_debug: bool = False
        self._print_lock = threading.Lock()

    def toggle_debug(self) -> bool:
        """Toggle debug mode to show/hide routing traces."""
        self._show_debug = not self._show_debug
        status = "enabled" if self._show_debug else "disabled"
        self._print(f"[dim]Debug mode {status}[/dim]")
        return self._show_debug

    @property
    def show_debug(self) -> bool:
        return self._show_debug

    def info(self, message: str) -> None:
        self._print(message)

    def warning(self, message: str) -> None:
        self._print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self._print(f"[bold red]Error:[/bold red] {escape(message)}")

    def welcome(self, message: str = "[bold blue]clam[/bold blue] - shell commands and questions, one prompt.") -> None:
        self._print(message)
        self._print("[dim]Prefix with ! to force shell, ? to ask the agent, / for local commands.[/dim]")

    def debug_message(self, message: str) -> None:
        if self._show_debug:
            self._print(f"[dim]{escape(message)}[/dim]")

    def mode_label(self, mode: str) -> str:
        style = MODE_STYLES.get(mode, "white")
        return f"[{style}]{mode}[/{style}]"

    def classification(self, text: str, result: Classification) -> None:
        """Render one authoritative classification."""
        line = Text.from_markup(f"{self.mode_label(result.mode.value)} [dim]rule={result.rule}[/dim] ")
        line.append_text(Text.from_ansi(render_line(text)) if result.mode is Mode.SHELL else Text(text))
        with self._print_lock:
            self.console.print(line)
        if result.suggestion:
            self._print(f"[dim]did you mean[/dim] [bold]{escape(result.suggestion)}[/bold]?")

    def completions(self, completions: Sequence[Completion]) -> None:
        if not completions:
            self._print("[dim](no completions)[/dim]")
            return
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("", no_wrap=True)
        table.add_column("value", no_wrap=True)
        table.add_column("group")
        table.add_column("score", justify="right")
        table.add_column("description", style="dim")
        for item in completions:
            table.add_row(
                item.icon or "",
                escape(item.label),
                item.group.name.lower(),
                str(item.score),
                escape(item.description or ""),
            )
        with self._print_lock:
            self.console.print(table)

    def route_result(self, result: RouteResult) -> None:
        """Render the outcome of a routed line."""
        self.debug_message(f"route kind={result.kind.value} mode={result.mode.value} elapsed={result.elapsed_ms}ms")
        if result.output.strip():
            self._print(escape(result.output.rstrip()))
        if result.error:
            if result.kind in (RouteKind.SLASH, RouteKind.INVALID):
                self.warning(result.error)
            else:
                self.error(result.error.rstrip())
        elif result.kind is RouteKind.SHELL and not result.output.strip():
            self._print("[dim](no output)[/dim]")

    def _print(self, message: str) -> None:
        with self._print_lock:
            self.console.print(message)


def create_cli_renderer() -> Renderer:
    """Create and return a Renderer instance."""
    return Renderer()
