"""Command line interface for cryptoplug."""

from .app import app

__all__ = ["app"]
