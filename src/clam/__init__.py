"""clam - a shell that understands what you mean."""

from .completion import CompletionManager
from .core import CommandOracle, InputRouter, ModeClassifier
from .types import Mode

__version__ = "0.1.0"

__all__ = ["CommandOracle", "CompletionManager", "InputRouter", "Mode", "ModeClassifier"]
