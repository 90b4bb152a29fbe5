"""JSON file persistence backend.

Stores every key in a single JSON document, the way a preferences file
would. Writes are atomic: the document is written to a temporary file in
the same directory and moved over the original.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .base import PersistenceAdapter


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", delete=False, dir=str(path.parent), suffix=".tmp"
    ) as tmp:
        tmp.write(text)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_name = tmp.name
    os.replace(tmp_name, path)


class JSONFilePersistence(PersistenceAdapter):
    """File-backed string list store.

    Layout:
        {"<key>": ["<value>", ...], ...}

    The document is loaded on connect and rewritten on every set_list.
    Keys holding anything other than a list are kept as they are. Until a
    connect() has read the document successfully, reads and writes are
    refused, so an unreadable file is never overwritten.
    """

    def __init__(self, path: str | Path = "./preferences.json"):
        self._path = Path(path).expanduser()
        self._data: dict[str, Any] | None = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Load the document from disk, if it exists."""
        self._data = await asyncio.to_thread(self._read)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            document: Any = json.load(f)
        if not isinstance(document, dict):
            raise ValueError(f"Invalid preferences format in {self._path}, expected an object")
        return document

    def _require_document(self) -> dict[str, Any]:
        if self._data is None:
            raise RuntimeError(
                f"Preferences file {self._path} is not loaded. Call connect() first."
            )
        return self._data

    async def disconnect(self) -> None:
        """Forget the loaded document; every write is already on disk."""
        self._data = None

    async def get_list(self, key: str) -> list[str]:
        value = self._require_document().get(key)
        if not isinstance(value, list):
            return []
        return [str(item) for item in value]

    async def set_list(self, key: str, values: list[str]) -> None:
        async with self._lock:
            updated = dict(self._require_document())
            updated[key] = list(values)
            text = json.dumps(updated, ensure_ascii=False, indent=2)
            await asyncio.to_thread(_atomic_write_text, self._path, text)
            self._data = updated

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path
