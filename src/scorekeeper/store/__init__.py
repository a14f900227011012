"""Persistent storage for the delayed nomination queue."""

from scorekeeper.store.queue import QueueStore

__all__ = ["QueueStore"]
