"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from parley.conversation import ConversationController, MessageStore
from parley.persistence import InMemoryPersistence


class FakeModelClient:
    """Scripted ModelClient.

    Each call pops the next scripted reply; exceptions in the script are
    raised instead of returned. When a gate is set, calls block until it
    is released.
    """

    def __init__(self, replies=None, gate: asyncio.Event | None = None):
        self._replies = list(replies or [])
        self.gate = gate
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        reply = self._replies.pop(0) if self._replies else "ok"
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


class RecordingPersistence(InMemoryPersistence):
    """In-memory adapter that records every write and can be made to fail or block."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes: list[tuple[str, list[str]]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.write_gate: asyncio.Event | None = None
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def get_list(self, key: str) -> list[str]:
        if self.fail_reads:
            raise OSError("disk unreadable")
        return await super().get_list(key)

    async def set_list(self, key: str, values: list[str]) -> None:
        if self.write_gate is not None:
            await self.write_gate.wait()
        if self.fail_writes:
            raise OSError("disk full")
        self.writes.append((key, list(values)))
        await super().set_list(key, values)


@pytest.fixture
def make_adapter():
    """Return a factory for recording adapters with optional initial lists."""
    return RecordingPersistence


@pytest.fixture
def make_client():
    """Return a factory for scripted model clients."""
    return FakeModelClient


@pytest.fixture
def adapter():
    """Return a recording in-memory adapter."""
    return RecordingPersistence()


@pytest.fixture
def client():
    """Return a scripted model client that always answers 'ok'."""
    return FakeModelClient()


@pytest.fixture
def store(adapter):
    """Return a message store on the recording adapter."""
    return MessageStore(adapter)


@pytest.fixture
def controller(store, client):
    """Return a controller wired to the fake store and client."""
    return ConversationController(store, client)


@pytest.fixture
def parley_env(monkeypatch, tmp_path):
    """Clear PARLEY_* and provider variables and point storage at tmp_path."""
    for name in list(os.environ):
        if name.startswith("PARLEY_") or name in (
            "GEMINI_API_KEY",
            "OPENAI_API_KEY",
            "ANTHROPIC_API_KEY",
            "GEMINI_MODEL",
            "OPENAI_CHAT_MODEL",
            "ANTHROPIC_MODEL",
        ):
            monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
        "anthropic": os.getenv("ANTHROPIC_API_KEY"),
    }
