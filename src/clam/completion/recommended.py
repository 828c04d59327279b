"""Curated developer commands surfaced first in command completion."""

from __future__ import annotations

from enum import Enum


class CommandCategory(str, Enum):
    SHELL = "shell"
    VERSION_CONTROL = "version-control"
    PACKAGE_MANAGER = "package-manager"
    RUNTIME = "runtime"
    CONTAINER = "container"
    NETWORK = "network"
    EDITOR = "editor"
    OTHER = "other"


CATEGORY_DESCRIPTIONS: dict[CommandCategory, str] = {
    CommandCategory.SHELL: "shell utility",
    CommandCategory.VERSION_CONTROL: "version control",
    CommandCategory.PACKAGE_MANAGER: "package manager",
    CommandCategory.RUNTIME: "language runtime",
    CommandCategory.CONTAINER: "containers",
    CommandCategory.NETWORK: "network",
    CommandCategory.EDITOR: "editor",
    CommandCategory.OTHER: "command",
}

_CATEGORY_MEMBERS: dict[CommandCategory, tuple[str, ...]] = {
    CommandCategory.SHELL: (
        "ls", "cd", "cat", "grep", "find", "mkdir", "rm", "cp", "mv", "chmod",
        "chown", "pwd", "echo", "head", "tail", "less", "more", "wc", "sort",
        "uniq", "diff", "which", "whereis", "man", "history", "clear", "touch",
        "ln", "tar", "gzip", "gunzip", "zip", "unzip", "xargs", "sed", "awk",
        "ps", "kill", "top", "htop", "df", "du", "free", "env", "export", "source",
    ),
    CommandCategory.VERSION_CONTROL: ("git", "gh", "svn", "hg"),
    CommandCategory.PACKAGE_MANAGER: (
        "npm", "npx", "pnpm", "yarn", "bun", "pip", "pip3", "pipx", "uv",
        "cargo", "brew", "apt", "dnf", "yum", "pacman",
    ),
    CommandCategory.RUNTIME: ("node", "deno", "python", "python3", "ruby", "go", "rustc", "java", "javac"),
    CommandCategory.CONTAINER: ("docker", "docker-compose", "podman", "kubectl", "helm", "k9s"),
    CommandCategory.NETWORK: (
        "curl", "wget", "ssh", "scp", "rsync", "ping", "traceroute", "netstat",
        "nc", "telnet", "ftp", "sftp",
    ),
    CommandCategory.EDITOR: ("vim", "nvim", "nano", "code", "emacs", "vi"),
}  # fmt: skip

COMMAND_CATEGORIES: dict[str, CommandCategory] = {
    command: category for category, commands in _CATEGORY_MEMBERS.items() for command in commands
}

RECOMMENDED_COMMANDS: tuple[str, ...] = tuple(COMMAND_CATEGORIES)


def is_recommended_command(command: str) -> bool:
    return command in COMMAND_CATEGORIES


def get_command_category(command: str) -> CommandCategory:
    return COMMAND_CATEGORIES.get(command, CommandCategory.OTHER)


def get_command_description(command: str) -> str:
    return CATEGORY_DESCRIPTIONS[get_command_category(command)]
