"""Local slash command table and parsing helpers."""

from __future__ import annotations

from dataclasses import dataclass

SLASH_PREFIX = "/"


@dataclass(frozen=True)
class SlashCommand:
    """A command handled by the client itself."""

    name: str
    description: str

    @property
    def trigger(self) -> str:
        return f"{SLASH_PREFIX}{self.name}"


SLASH_COMMANDS: tuple[SlashCommand, ...] = (
    SlashCommand("help", "Show help and available commands"),
    SlashCommand("clear", "Clear the screen"),
    SlashCommand("config", "View or edit configuration"),
    SlashCommand("history", "Show command history"),
    SlashCommand("status", "Show session status"),
    SlashCommand("mode", "Switch between shell and natural language modes"),
    SlashCommand("shell", "Run the rest of the line as a shell command"),
    SlashCommand("edit", "Open a file in the editor"),
    SlashCommand("version", "Show version information"),
    SlashCommand("debug", "Toggle debug mode"),
    SlashCommand("quit", "Exit the session"),
    SlashCommand("exit", "Exit the session"),
)

KNOWN_SLASH_COMMANDS: frozenset[str] = frozenset(command.name for command in SLASH_COMMANDS)


def get_slash_command(name: str) -> SlashCommand | None:
    for command in SLASH_COMMANDS:
        if command.name == name:
            return command
    return None


def parse_slash_command(line: str) -> tuple[str, str]:
    """Parse '/name rest of line' into the name and the raw argument string."""

    body = line.strip()
    if body.startswith(SLASH_PREFIX):
        body = body[1:]
    name, _, args = body.partition(" ")
    return name, args.strip()
