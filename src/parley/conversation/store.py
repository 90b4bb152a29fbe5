"""In-memory transcript with an explicit persistence round-trip.

Hides the record encoding and the storage key from the rest of the engine.
Mutations never write by themselves; callers decide when to persist.
"""

import asyncio
from typing import Any

from ..persistence import PersistenceAdapter
from .errors import PersistenceError, SerializationError
from .models import Message, decode_message, encode_message

DEFAULT_STORAGE_KEY = "messages"


class MessageStore:
    """Owns the ordered transcript and is the sole writer of its storage key.

    The transcript is append-only except for a full clear.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._adapter = adapter
        self._key = key
        self._messages: list[Message] = []
        self._write_lock = asyncio.Lock()
        self._skipped_on_load = 0
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Store", message)

    @property
    def key(self) -> str:
        return self._key

    @property
    def skipped_on_load(self) -> int:
        """Number of malformed records skipped by the last load()."""
        return self._skipped_on_load

    def append(self, message: Message) -> None:
        """Add a message to the end of the transcript."""
        self._messages.append(message)

    def clear(self) -> None:
        """Replace the transcript with an empty one."""
        self._messages = []

    def snapshot(self) -> tuple[Message, ...]:
        """Read-only view of the transcript in conversation order."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    async def load(self) -> tuple[Message, ...]:
        """Replace the transcript with the persisted one.

        Malformed records are skipped individually so one corrupt entry
        cannot wipe the rest of the history.

        Returns:
            The loaded transcript

        Raises:
            PersistenceError: If the adapter cannot be read
        """
        try:
            raw_records = await self._adapter.get_list(self._key)
        except Exception as e:
            raise PersistenceError(f"Failed to read '{self._key}': {e}") from e

        loaded: list[Message] = []
        skipped = 0
        for index, raw in enumerate(raw_records):
            try:
                loaded.append(decode_message(raw, index=index))
            except SerializationError as e:
                skipped += 1
                self._debug("warning", f"Skipping record: {e}")

        self._messages = loaded
        self._skipped_on_load = skipped
        self._debug(
            "info",
            f"Loaded {len(loaded)} message(s) from '{self._key}'"
            + (f", skipped {skipped}" if skipped else "")
        )
        return self.snapshot()

    async def persist(self) -> None:
        """Write the current transcript, in order, to the storage key.

        Writes are serialized and each one encodes the transcript as it is
        when the write starts, so the durable copy never moves backwards.

        Raises:
            PersistenceError: If the adapter fails to write
        """
        async with self._write_lock:
            records = [encode_message(message) for message in self._messages]
            try:
                await self._adapter.set_list(self._key, records)
            except Exception as e:
                self._debug("error", f"Write of {len(records)} record(s) failed: {e}")
                raise PersistenceError(f"Failed to write '{self._key}': {e}") from e
            self._debug("debug", f"Persisted {len(records)} record(s)")
