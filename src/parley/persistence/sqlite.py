"""SQLite persistence backend.

Provides durable string list storage using a SQLite database file.
Uses aiosqlite for async access.
"""

from pathlib import Path

import aiosqlite

from .base import PersistenceAdapter


class SQLitePersistence(PersistenceAdapter):
    """SQLite-backed string list store.

    Each list is stored as ordered rows keyed by (key, position) and is
    replaced as a whole inside a single transaction.
    """

    def __init__(self, path: str | Path = "./parley.db"):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database connection and create the schema."""
        if self._connection is not None:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._create_schema()

    async def _create_schema(self) -> None:
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS string_lists (
                key TEXT NOT NULL,
                position INTEGER NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (key, position)
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("SQLite persistence is not connected. Call connect() first.")
        return self._connection

    async def get_list(self, key: str) -> list[str]:
        connection = self._require_connection()
        async with connection.execute(
            "SELECT value FROM string_lists WHERE key = ? ORDER BY position ASC",
            (key,)
        ) as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]

    async def set_list(self, key: str, values: list[str]) -> None:
        connection = self._require_connection()
        try:
            await connection.execute("DELETE FROM string_lists WHERE key = ?", (key,))
            await connection.executemany(
                "INSERT INTO string_lists (key, position, value) VALUES (?, ?, ?)",
                [(key, position, value) for position, value in enumerate(values)]
            )
            await connection.commit()
        except Exception:
            await connection.rollback()
            raise

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
