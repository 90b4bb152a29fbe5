"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Recall of previously submitted inputs
- How trace lines are formatted and filtered
- How a transcript message is drawn
"""

from datetime import datetime

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Key
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..conversation import Message
from .config import (
    BUBBLE_TIME_FORMAT,
    COMPONENT_STYLES,
    LEVEL_STYLES,
    NOTIFY_SHORT,
    RECALL_LIMIT,
    TRACE_TIME_FORMAT,
    LogLevel,
)


class InputRecall:
    """Shell-style recall of submitted inputs.

    `older()` walks back from the newest entry, `newer()` walks forward and
    returns an empty string once it steps past the newest one.
    """

    def __init__(self, limit: int = RECALL_LIMIT) -> None:
        self._entries: list[str] = []
        self._limit = limit
        self._cursor: int | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def remember(self, text: str) -> None:
        # Consecutive duplicates collapse into one entry
        if not self._entries or self._entries[-1] != text:
            self._entries.append(text)
            if len(self._entries) > self._limit:
                self._entries.pop(0)
        self._cursor = None

    def older(self) -> str | None:
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(0, self._cursor - 1)
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        if self._cursor is None:
            return None
        if self._cursor + 1 < len(self._entries):
            self._cursor += 1
            return self._entries[self._cursor]
        self._cursor = None
        return ""


class MessageBubble(Vertical):
    """One transcript message; clicking it copies the text."""

    def __init__(self, message: Message, **kwargs) -> None:
        side = "user-message" if message.is_user else "assistant-message"
        super().__init__(classes=f"chat-message {side}", **kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        who = "> You" if self.message.is_user else "< Assistant"
        stamp = self.message.timestamp.strftime(BUBBLE_TIME_FORMAT)
        yield Static(f"{who} [{stamp}]", classes="message-header", markup=False)
        if self.message.is_user:
            yield Static(self.message.text, classes="message-content", markup=False)
        else:
            # Model replies are usually markdown
            yield Markdown(self.message.text, classes="message-content")

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self.message.text)
        self.app.notify("Copied to clipboard", timeout=NOTIFY_SHORT)


class ChatInputBar(Horizontal):
    """Multi-line text entry with a Send button.

    Ctrl+J submits (terminals do not report modifiers on Enter). Up on the
    first character and Down on the last one walk the input recall.
    """

    class Submitted(TextualMessage):
        """Posted with the raw text when the user submits."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.recall = InputRecall()

    @property
    def _text_area(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def compose(self) -> ComposeResult:
        area = TextArea(id="chat-input", show_line_numbers=False)
        area.cursor_blink = False
        area.highlight_cursor_line = False
        yield area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        self.focus_input()

    def focus_input(self) -> None:
        self._text_area.focus()

    def set_busy(self, busy: bool) -> None:
        """Dim the bar and lock the button while a reply is pending."""
        self.set_class(busy, "-busy")
        self.query_one("#send-btn", Button).disabled = busy

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self.submit()

    def on_key(self, event: Key) -> None:
        area = self._text_area
        if event.key == "ctrl+j":
            self.submit()
        elif event.key == "up" and area.cursor_location == (0, 0):
            self._show(self.recall.older())
        elif event.key == "down" and area.cursor_location == area.document.end:
            self._show(self.recall.newer())
        else:
            return
        event.prevent_default()
        event.stop()

    def submit(self) -> None:
        """Post the current text, unless it is blank, and reset the entry."""
        area = self._text_area
        value = area.text
        if not value.strip():
            return
        self.recall.remember(value)
        area.text = ""
        self.post_message(self.Submitted(value))

    def _show(self, text: str | None) -> None:
        if text is not None:
            self._text_area.text = text


class DebugPanel(RichLog):
    """Collapsible trace of engine activity, filtered by a level threshold."""

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, wrap=False, **kwargs)
        self._threshold = LogLevel(log_level)

    @property
    def log_level(self) -> LogLevel:
        return self._threshold

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._threshold = LogLevel(level)
        self._refresh_subtitle()

    def on_mount(self) -> None:
        self.hide()

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Write one trace line if `level` reaches the threshold."""
        level = LogLevel(level)
        if level < self._threshold:
            return
        when = datetime.now().strftime(TRACE_TIME_FORMAT)
        level_style = LEVEL_STYLES[level]
        component_style = COMPONENT_STYLES.get(component, "white")
        self.write(
            f"[dim]{when}[/] [{level_style}]{level.name:<7}[/] "
            f"[{component_style}]\\[{component}][/] {message}"
        )

    def route(self, level: str, component: str, message: str) -> None:
        """Adapter for the engine debug callback signature."""
        self.add_entry(component, message, LogLevel.from_string(level))

    def debug(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def hide(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"Level: {self._threshold.name}" if self.display else "Hidden"


class ChatHistoryWidget(VerticalScroll):
    """Scrollable view of the session transcript.

    The widget keeps its own copy of what is on screen and reconciles it
    with each snapshot the session publishes.
    """

    BORDER_TITLE = "Chat"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._shown: tuple[Message, ...] = ()

    def on_mount(self) -> None:
        self._refresh_subtitle()

    def sync(self, messages: tuple[Message, ...]) -> None:
        """Render `messages`, appending when the snapshot extends what is shown."""
        messages = tuple(messages)
        count = len(self._shown)
        if messages[:count] == self._shown:
            fresh = messages[count:]
        else:
            self.remove_children()
            fresh = messages
        if fresh:
            self.mount_all(MessageBubble(message) for message in fresh)
        self._shown = messages
        self._refresh_subtitle()
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Text of the newest assistant message on screen, if any."""
        replies = [m.text for m in self._shown if not m.is_user]
        return replies[-1] if replies else None

    def _refresh_subtitle(self) -> None:
        count = len(self._shown)
        self.border_subtitle = f"{count} messages" if count else "Conversation history"
