"""Command-line interface for liveorder."""

from .app import app

__all__ = ["app"]
