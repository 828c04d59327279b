"""Built-in completers."""

from .command import CommandCompleter
from .entity import DirEntry, EntityCompleter, list_directory
from .slash import SlashCompleter

__all__ = ["CommandCompleter", "DirEntry", "EntityCompleter", "SlashCompleter", "list_directory"]
