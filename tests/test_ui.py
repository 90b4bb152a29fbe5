"""Tests for the Textual TUI, driven headless through Pilot."""
from datetime import datetime

import pytest

from parley import ChatSession
from parley.conversation import Message, Role
from parley.conversation.models import encode_message
from parley.ui import ChatHistoryWidget, ChatInputBar, LogLevel, ParleyApp
from parley.ui.themes import DARK_THEME, LIGHT_THEME
from parley.ui.widgets import InputRecall


def _records():
    return [
        encode_message(Message(role=Role.USER, text="Hi", timestamp=datetime(2024, 5, 1, 9, 0))),
        encode_message(Message(role=Role.ASSISTANT, text="Hello!", timestamp=datetime(2024, 5, 1, 9, 1))),
    ]


class TestParleyApp:
    """Tests for ParleyApp."""

    @pytest.mark.asyncio
    async def test_restores_history_on_mount(self, make_adapter, client):
        """Test that the persisted transcript is shown at startup."""
        session = ChatSession(make_adapter({"messages": _records()}), client)
        app = ParleyApp(session)

        async with app.run_test() as pilot:
            await pilot.pause()
            chat = app.query_one("#chat-history", ChatHistoryWidget)

            assert chat.get_last_response() == "Hello!"
            assert len(chat.query(".chat-message")) == 2

        await session.close()

    @pytest.mark.asyncio
    async def test_submit_runs_a_turn(self, adapter, make_client):
        """Test that submitting input sends it and renders the reply."""
        session = ChatSession(adapter, make_client(["Hello!"]))
        app = ParleyApp(session)

        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#chat-input-bar", ChatInputBar).post_message(ChatInputBar.Submitted("Hi"))
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert [m.text for m in session.messages] == ["Hi", "Hello!"]
            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.get_last_response() == "Hello!"
            assert not app.query_one("#loading").has_class("-active")

        await session.close()

    @pytest.mark.asyncio
    async def test_clear_binding_empties_chat(self, make_adapter, client):
        """Test that Ctrl+K clears the transcript and the display."""
        adapter = make_adapter({"messages": _records()})
        session = ChatSession(adapter, client)
        app = ParleyApp(session)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("ctrl+k")
            await pilot.pause()

            assert session.messages == ()
            assert app.query_one("#chat-history", ChatHistoryWidget).get_last_response() is None

        await session.close()
        assert await adapter.get_list("messages") == []

    @pytest.mark.asyncio
    async def test_theme_toggle(self, adapter, client):
        """Test switching between the dark and light palettes."""
        session = ChatSession(adapter, client)
        app = ParleyApp(session)

        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.theme == DARK_THEME.name

            app.action_toggle_theme()
            assert app.theme == LIGHT_THEME.name

            app.action_toggle_theme()
            assert app.theme == DARK_THEME.name

        await session.close()

    @pytest.mark.asyncio
    async def test_log_panel_shown_with_log_level(self, adapter, client):
        """Test that passing a log level shows the filtered log panel."""
        session = ChatSession(adapter, client)
        app = ParleyApp(session, log_level="warning")

        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one("#debug-panel")

            assert panel.display
            assert panel.log_level == LogLevel.WARNING

        await session.close()


class TestLogLevel:
    """Tests for LogLevel parsing."""

    @pytest.mark.parametrize("name,level", [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Warning", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("nonsense", LogLevel.DEBUG),
    ])
    def test_from_string(self, name: str, level: int):
        """Test that names map to levels, unknown names to DEBUG."""
        assert LogLevel.from_string(name) == level


class TestInputRecall:
    """Tests for recall of submitted inputs."""

    def test_walks_back_and_forward(self):
        """Test that older/newer step through entries and end on a blank line."""
        recall = InputRecall()
        for text in ("one", "two", "three"):
            recall.remember(text)

        assert recall.older() == "three"
        assert recall.older() == "two"
        assert recall.older() == "one"
        assert recall.older() == "one"
        assert recall.newer() == "two"
        assert recall.newer() == "three"
        assert recall.newer() == ""
        assert recall.newer() is None

    def test_empty_recall(self):
        """Test that nothing is recalled before the first submission."""
        recall = InputRecall()

        assert recall.older() is None
        assert recall.newer() is None

    def test_collapses_repeats_and_caps_size(self):
        """Test that repeated inputs are stored once and old ones fall off."""
        recall = InputRecall(limit=2)
        for text in ("a", "a", "b", "c"):
            recall.remember(text)

        assert len(recall) == 2
        assert recall.older() == "c"
        assert recall.older() == "b"
        assert recall.older() == "b"
