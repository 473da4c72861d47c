"""Command-line interface for pth2exe."""

from .app import app, main

__all__ = ["app", "main"]
