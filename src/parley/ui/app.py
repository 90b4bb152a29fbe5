"""Main Textual TUI application.

Orchestrates the UI components and forwards user intents to a ChatSession.
The app never mutates the transcript itself; it re-renders from session
events.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..conversation import PersistenceError
from ..session import ChatSession
from .callbacks import TUICallback
from .config import NOTIFY_ERROR, NOTIFY_SHORT, LogLevel
from .styles import APP_CSS
from .themes import DARK_THEME, LIGHT_THEME
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class ParleyApp(App):
    """Textual TUI for a persistent chat session."""

    CSS = APP_CSS
    TITLE = "Parley"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield Static("Thinking...", id="loading")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Wire the session to the widgets and restore the transcript."""
        self.register_theme(DARK_THEME)
        self.register_theme(LIGHT_THEME)
        self.theme = DARK_THEME.name

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        log_panel = self.query_one("#debug-panel", DebugPanel)

        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        callback = TUICallback(
            chat=chat,
            input_bar=self.query_one("#chat-input-bar", ChatInputBar),
            loading=self.query_one("#loading", Static),
            log_panel=log_panel,
            app=self,
        )
        self._session.set_debug_callback(callback.debug)
        self._unsubscribe = self._session.subscribe(callback)

        try:
            messages = await self._session.open()
        except PersistenceError as e:
            log_panel.error("TUI", f"Could not restore chat: {e}")
            self.notify(f"Could not restore chat: {e}", severity="error", timeout=NOTIFY_ERROR)
            messages = self._session.messages

        chat.sync(messages)
        skipped = self._session.store.skipped_on_load
        if skipped:
            self.notify(f"Skipped {skipped} unreadable message(s)", severity="warning")

        self.sub_title = f"{self._session.model_name} | {self._session.backend_type}"
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._session.loading:
            self.notify("Waiting for the current reply", severity="warning", timeout=NOTIFY_SHORT)
            return
        self._send(event.value)

    @work()
    async def _send(self, text: str) -> None:
        """Run one turn as a background async worker."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.info("TUI", f"Sending: '{text[:50]}'")
        try:
            await self._session.send(text)
        except Exception as e:
            log_panel.error("TUI", f"Exception: {e}")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=NOTIFY_ERROR)

    async def action_clear_chat(self) -> None:
        """Clear the conversation and its persisted copy."""
        await self._session.clear()
        self.notify("Chat cleared", timeout=NOTIFY_SHORT)

    def action_toggle_theme(self) -> None:
        """Switch between the light and dark palettes."""
        if self.theme == DARK_THEME.name:
            self.theme = LIGHT_THEME.name
        else:
            self.theme = DARK_THEME.name

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_SHORT)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    The app opens the session on mount; it is always closed here.

    Args:
        session: Session to drive (not yet opened)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ParleyApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await session.close()
