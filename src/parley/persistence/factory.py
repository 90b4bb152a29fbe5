"""Factory for creating persistence backends."""

from typing import Any

from .base import PersistenceAdapter


def create_persistence_adapter(
    backend: str = "sqlite",
    **kwargs: Any
) -> PersistenceAdapter:
    """Create a persistence backend.

    Args:
        backend: Backend type ("memory", "sqlite" or "file")
        **kwargs: Backend-specific configuration
            For sqlite and file:
                - path: str | Path

    Returns:
        PersistenceAdapter instance

    Raises:
        ValueError: If backend type is not supported
    """
    backend_lower = backend.lower()

    if backend_lower == "memory":
        from .in_memory import InMemoryPersistence
        return InMemoryPersistence(**kwargs)

    elif backend_lower == "sqlite":
        from .sqlite import SQLitePersistence
        return SQLitePersistence(**kwargs)

    elif backend_lower == "file":
        from .json_file import JSONFilePersistence
        return JSONFilePersistence(**kwargs)

    raise ValueError(
        f"Unsupported persistence backend: {backend}. "
        f"Supported backends: memory, sqlite, file"
    )
