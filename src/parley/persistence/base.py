"""Abstract base class for persistence backends.

This module defines the interface for durable key/value storage of
ordered string lists. The abstraction hides:
- Storage format (JSON document, SQLite rows, in-memory dict)
- Persistence mechanism (file, database, none)
- Connection management
"""

from abc import ABC, abstractmethod


class PersistenceAdapter(ABC):
    """Abstract string-keyed store of ordered string lists.

    Values must survive process restarts for durable backends. Lists are
    returned in the order they were written.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def get_list(self, key: str) -> list[str]:
        """Read the list stored under key.

        Returns:
            The stored strings in order, or an empty list if the key is absent
        """

    @abstractmethod
    async def set_list(self, key: str, values: list[str]) -> None:
        """Replace the list stored under key."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
