"""Persistence layer for Ice Lure Notes."""

from icelure.db.store import KeyValueStore

__all__ = ["KeyValueStore"]
