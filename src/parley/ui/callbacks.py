"""Session listener for the TUI.

Hides the details of how the TUI receives updates from the conversation
engine. Engine events may arrive from a worker, so widget updates go
through the app's thread-safe call when needed.
"""

import threading
from typing import TYPE_CHECKING, Any

from ..conversation import (
    PersistenceFailed,
    SessionEvent,
    StateChanged,
    TranscriptChanged,
    TurnFailed,
)
from .config import NOTIFY_ERROR

if TYPE_CHECKING:
    from textual.app import App
    from textual.widget import Widget

    from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class TUICallback:
    """Translates session events into widget updates.

    Subscribe an instance with ``session.subscribe(callback)``; it is also
    usable as the session debug callback through ``debug``.
    """

    def __init__(
        self,
        chat: "ChatHistoryWidget",
        input_bar: "ChatInputBar",
        loading: "Widget",
        log_panel: "DebugPanel | None" = None,
        app: "App | None" = None
    ) -> None:
        self.chat = chat
        self.input_bar = input_bar
        self.loading = loading
        self.log_panel = log_panel
        self.app = app

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def __call__(self, event: SessionEvent) -> None:
        if isinstance(event, TranscriptChanged):
            self._call_thread_safe(self.chat.sync, event.messages)
        elif isinstance(event, StateChanged):
            self._call_thread_safe(self._set_loading, event.state.loading)
        elif isinstance(event, TurnFailed):
            self._notify(f"Error: {event.reason}", severity="error")
        elif isinstance(event, PersistenceFailed):
            self._notify(f"Chat not saved: {event.reason}", severity="warning")

    def debug(self, level: str, component: str, message: str) -> None:
        """Route engine log lines to the log panel."""
        if self.log_panel is not None:
            self._call_thread_safe(self.log_panel.route, level, component, message)

    def _set_loading(self, loading: bool) -> None:
        self.loading.set_class(loading, "-active")
        self.input_bar.set_busy(loading)

    def _notify(self, message: str, severity: str) -> None:
        if self.app is not None:
            self._call_thread_safe(
                self.app.notify, message, severity=severity, timeout=NOTIFY_ERROR
            )
