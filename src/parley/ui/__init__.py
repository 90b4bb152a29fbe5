"""Terminal UI module for parley.

Provides a Textual-based TUI for a persistent chat session.

Module structure (Parnas principle - each module hides a design decision):
- config.py: UI constants and log levels
- widgets.py: Custom widgets (input history, log rendering, chat display)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and the light/dark pairing
- callbacks.py: Session integration (how TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ParleyApp, run_textual_tui
from .callbacks import TUICallback
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "ParleyApp",
    "TUICallback",
    "run_textual_tui",
]
