"""Persistence layer – each store owns its file path, data format, and I/O."""

from .slots import SlotStore

__all__ = [
    "SlotStore",
]
