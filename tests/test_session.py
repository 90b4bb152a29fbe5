"""Unit tests for ChatSession."""
import pytest

from parley import ChatSession, SessionConfig, create_session
from parley.conversation import (
    ConversationController,
    PersistenceError,
    PersistenceFailed,
    TranscriptChanged,
    TurnPhase,
)
from parley.llm import GeminiProvider
from parley.persistence.json_file import JSONFilePersistence


class TestChatSession:
    """Tests for the session lifecycle and intents."""

    @pytest.mark.asyncio
    async def test_open_restores_transcript(self, make_adapter, make_client):
        """Test that a new session sees what an earlier session saved."""
        adapter = make_adapter()

        async with ChatSession(adapter, make_client(["Hello!"])) as first:
            await first.send("Hi")

        second = ChatSession(adapter, make_client())
        restored = await second.open()
        await second.close()

        assert [m.text for m in restored] == ["Hi", "Hello!"]
        assert [m.is_user for m in restored] == [True, False]

    @pytest.mark.asyncio
    async def test_context_manager_connects_and_closes(self, adapter, client):
        """Test that entering connects storage and leaving releases everything."""
        async with ChatSession(adapter, client) as session:
            assert adapter.connected
            assert session.state.phase == TurnPhase.IDLE

        assert not adapter.connected
        assert client.closed

    @pytest.mark.asyncio
    async def test_send_and_clear(self, adapter, client):
        """Test the send and clear intents end to end."""
        async with ChatSession(adapter, client) as session:
            events = []
            session.subscribe(events.append)

            assert await session.send("Hi") is True
            assert len(session.messages) == 2
            assert not session.loading

            await session.clear()

            assert session.messages == ()
            assert events[-1] == TranscriptChanged(())
        assert await adapter.get_list("messages") == []

    @pytest.mark.asyncio
    async def test_custom_storage_key(self, adapter, client):
        """Test that the transcript is written under the configured key."""
        async with ChatSession(adapter, client, storage_key="chat") as session:
            await session.send("Hi")

        assert len(await adapter.get_list("chat")) == 2
        assert await adapter.get_list("messages") == []

    @pytest.mark.asyncio
    async def test_open_wraps_read_failure(self, adapter, client):
        """Test that an unreadable transcript raises PersistenceError."""
        adapter.fail_reads = True
        session = ChatSession(adapter, client)

        with pytest.raises(PersistenceError):
            await session.open()
        await session.close()

        assert not adapter.connected

    @pytest.mark.asyncio
    async def test_open_wraps_connect_failure(self, tmp_path, client):
        """Test that storage that cannot be opened raises PersistenceError."""
        path = tmp_path / "prefs.json"
        path.write_text("not json", encoding="utf-8")
        session = ChatSession(JSONFilePersistence(path), client)

        with pytest.raises(PersistenceError):
            await session.open()

    @pytest.mark.asyncio
    async def test_unreadable_file_is_not_overwritten(self, tmp_path, make_client):
        """Test that chatting after a failed open reports unsaved turns and keeps the file."""
        path = tmp_path / "prefs.json"
        path.write_text('{"theme": "dark", "messages": [', encoding="utf-8")
        session = ChatSession(JSONFilePersistence(path), make_client(["Hello!"]))
        events = []
        session.subscribe(events.append)

        with pytest.raises(PersistenceError):
            await session.open()
        replied = await session.send("Hi")
        await session.close()

        assert replied is True
        assert [m.text for m in session.messages] == ["Hi", "Hello!"]
        assert sum(isinstance(e, PersistenceFailed) for e in events) == 2
        assert path.read_text(encoding="utf-8") == '{"theme": "dark", "messages": ['

    @pytest.mark.asyncio
    async def test_debug_callback_reaches_all_components(self, adapter, make_client):
        """Test that session, store and controller all log through one callback."""
        components = set()
        session = ChatSession(adapter, make_client([RuntimeError("boom")]))
        session.set_debug_callback(lambda level, component, message: components.add(component))

        async with session:
            await session.send("Hi")

        assert components == {"Session", "Store", "Controller"}
        assert session.last_error is not None

    def test_describes_backend_and_model(self, adapter, client):
        """Test the descriptive properties."""
        session = ChatSession(adapter, client)

        assert session.backend_type == "memory"
        assert session.model_name == "unknown"
        assert session.store.key == "messages"


class TestCreateSession:
    """Tests for create_session."""

    def test_builds_from_config(self, tmp_path):
        """Test that the configured provider and backend are used."""
        config = SessionConfig(
            provider="gemini",
            api_key="fake-key",
            model="gemini-2.5-pro",
            storage_backend="file",
            storage_path=tmp_path / "prefs.json",
        )

        session = create_session(config)

        assert session.backend_type == "file"
        assert session.model_name == "gemini-2.5-pro"
        assert isinstance(session.controller, ConversationController)

    def test_memory_backend_needs_no_path(self):
        """Test building a throwaway session."""
        session = create_session(SessionConfig(api_key="fake-key", storage_backend="memory"))

        assert session.backend_type == "memory"

    def test_missing_api_key_fails(self):
        """Test that a provider without a key cannot be built."""
        with pytest.raises(TypeError):
            create_session(SessionConfig(storage_backend="memory"))

    def test_unknown_provider_fails(self):
        """Test that an unknown provider cannot be built."""
        with pytest.raises(ValueError):
            create_session(SessionConfig(provider="mystery", api_key="x", storage_backend="memory"))

    def test_client_is_a_gemini_provider(self):
        """Test the default provider."""
        session = create_session(SessionConfig(api_key="fake-key", storage_backend="memory"))

        assert isinstance(session._client, GeminiProvider)
