"""Scorekeeper - delayed proxy nomination executor."""

__version__ = "0.1.0"
