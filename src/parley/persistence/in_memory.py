"""In-memory persistence backend.

Simple dict-based storage for throwaway sessions.
Data is lost when the application exits.
"""

from .base import PersistenceAdapter


class InMemoryPersistence(PersistenceAdapter):
    """In-memory string list store (session-only).

    Suitable for single-session use or testing.
    """

    def __init__(self, initial: dict[str, list[str]] | None = None):
        self._lists: dict[str, list[str]] = {
            key: list(values) for key, values in (initial or {}).items()
        }

    async def connect(self) -> None:
        """Initialize storage (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close storage (no-op for in-memory)."""
        pass

    async def get_list(self, key: str) -> list[str]:
        return list(self._lists.get(key, []))

    async def set_list(self, key: str, values: list[str]) -> None:
        self._lists[key] = list(values)

    @property
    def backend_type(self) -> str:
        return "memory"
