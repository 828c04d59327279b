"""Command line interface."""

from .app import app
from .render import Renderer

__all__ = ["Renderer", "app"]
