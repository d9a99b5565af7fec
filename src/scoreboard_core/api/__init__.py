"""HTTP service for display clients."""

from .main import create_app

__all__ = ["create_app"]
