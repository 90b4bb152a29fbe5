"""Persistence module for parley.

Provides durable storage of ordered string lists for the transcript.
"""

from .base import PersistenceAdapter
from .factory import create_persistence_adapter
from .in_memory import InMemoryPersistence

__all__ = [
    "InMemoryPersistence",
    "PersistenceAdapter",
    "create_persistence_adapter",
]
