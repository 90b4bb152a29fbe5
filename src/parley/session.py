"""Explicit session object for one conversation.

A ChatSession is constructed once per conversation and passed by reference
to whatever issues intents (CLI loop, TUI). It owns the persistence adapter
and the model client for its lifetime.

Usage:
    async with create_session(config) as session:
        await session.send("Hi")
        print(session.messages)
"""

from collections.abc import Callable
from typing import Any

from .config import SessionConfig
from .conversation import (
    ConversationController,
    Message,
    MessageStore,
    PersistenceError,
    SessionListener,
    SessionState,
    TurnFailed,
)
from .llm import ModelClient, create_llm_provider
from .persistence import PersistenceAdapter, create_persistence_adapter


class ChatSession:
    """Wires a persistence adapter, a model client, the store and the controller."""

    def __init__(
        self,
        adapter: PersistenceAdapter,
        client: ModelClient,
        storage_key: str = "messages",
        request_timeout: float | None = None,
    ) -> None:
        self._adapter = adapter
        self._client = client
        self._store = MessageStore(adapter, key=storage_key)
        self._controller = ConversationController(
            self._store, client, request_timeout=request_timeout
        )
        self._opened = False
        self._debug_callback: Any | None = None

    # --------- lifecycle ----------
    async def open(self) -> tuple[Message, ...]:
        """Connect storage and restore the persisted transcript.

        Returns:
            The restored transcript

        Raises:
            PersistenceError: If storage cannot be opened or the stored
                transcript cannot be read
        """
        try:
            await self._adapter.connect()
        except Exception as e:
            raise PersistenceError(
                f"Failed to open {self._adapter.backend_type} storage: {e}"
            ) from e
        self._opened = True
        messages = await self._store.load()
        self._debug("info", f"Session opened on {self._adapter.backend_type} storage")
        return messages

    async def close(self) -> None:
        """Release the model client and disconnect storage."""
        close = getattr(self._client, "close", None)
        try:
            if close is not None:
                await close()
        finally:
            if self._opened:
                await self._adapter.disconnect()
                self._opened = False
            self._debug("info", "Session closed")

    async def __aenter__(self) -> "ChatSession":
        await self.open()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # --------- intents ----------
    async def send(self, text: str) -> bool:
        """Send a user message. See ConversationController.send_user_message."""
        return await self._controller.send_user_message(text)

    async def clear(self) -> None:
        """Clear the conversation. See ConversationController.clear_conversation."""
        await self._controller.clear_conversation()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        return self._controller.subscribe(listener)

    # --------- observable state ----------
    @property
    def messages(self) -> tuple[Message, ...]:
        return self._store.snapshot()

    @property
    def state(self) -> SessionState:
        return self._controller.state

    @property
    def loading(self) -> bool:
        return self._controller.loading

    @property
    def last_error(self) -> TurnFailed | None:
        return self._controller.last_error

    @property
    def store(self) -> MessageStore:
        return self._store

    @property
    def controller(self) -> ConversationController:
        return self._controller

    @property
    def backend_type(self) -> str:
        return self._adapter.backend_type

    @property
    def model_name(self) -> str:
        return getattr(self._client, "model", "unknown")

    # --------- logging ----------
    def set_debug_callback(self, callback: Any) -> None:
        """Route engine logging to callback(level, component, message).

        Propagates to the store and the controller.
        """
        self._debug_callback = callback
        self._store.set_debug_callback(callback)
        self._controller.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)


def create_session(config: SessionConfig) -> ChatSession:
    """Build a ChatSession from configuration.

    Raises:
        TypeError: If the provider needs an API key and none is configured
        ValueError: If the provider or storage backend is not supported
    """
    llm_config: dict[str, Any] = {
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    if config.api_key is not None:
        llm_config["api_key"] = config.api_key
    if config.model is not None:
        llm_config["model"] = config.model

    storage_config: dict[str, Any] = {}
    storage_path = config.resolved_storage_path()
    if storage_path is not None:
        storage_config["path"] = storage_path

    client = create_llm_provider(config.provider, **llm_config)
    adapter = create_persistence_adapter(config.storage_backend, **storage_config)

    return ChatSession(
        adapter=adapter,
        client=client,
        storage_key=config.storage_key,
        request_timeout=config.request_timeout,
    )
