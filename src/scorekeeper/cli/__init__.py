"""Command-line interface."""

from scorekeeper.cli.app import app

__all__ = ["app"]
