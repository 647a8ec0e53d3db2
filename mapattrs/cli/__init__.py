"""Command-line interface for mapattrs."""

from .app import app

__all__ = ["app"]
