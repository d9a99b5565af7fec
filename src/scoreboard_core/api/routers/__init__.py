"""API routers module."""

from . import games, plugins

__all__ = ["games", "plugins"]
