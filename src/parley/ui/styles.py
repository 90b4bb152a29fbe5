"""Textual CSS for the chat screen.

Hides layout and styling decisions from the application logic. Colours
come from theme variables so both palettes share one stylesheet.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Transcript fills whatever the input bar and log leave over */
ChatHistoryWidget {
    height: 1fr;
    padding: 0 1;
    background: $panel;
    border: round $primary 50%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    scrollbar-gutter: stable;
}

ChatHistoryWidget:focus-within {
    border: round $primary;
}

MessageBubble {
    height: auto;
    width: 1fr;
    padding: 0 2 1 2;
    margin-bottom: 1;
}

MessageBubble.user-message {
    margin-left: 10;
    background: $primary 12%;
    border-left: outer $primary;
}

MessageBubble.assistant-message {
    margin-right: 10;
    background: $surface;
    border-left: outer $secondary;
}

MessageBubble .message-header {
    height: 1;
    margin-bottom: 1;
    color: $text-muted;
}

MessageBubble .message-content {
    height: auto;
}

/* Pending-reply indicator, toggled through the -active class */
#loading {
    display: none;
    height: 1;
    padding: 0 2;
    color: $accent;
    text-style: italic;
}

#loading.-active {
    display: block;
}

DebugPanel {
    height: 10;
    padding: 0 1;
    background: $panel;
    border: round $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
}

ChatInputBar {
    height: 6;
    background: $panel;
    border: round $primary 50%;
}

ChatInputBar:focus-within {
    border: round $primary;
}

ChatInputBar.-busy {
    border: round $warning;
    opacity: 70%;
}

ChatInputBar TextArea {
    width: 1fr;
    border: none;
    background: transparent;
}

ChatInputBar Button {
    min-width: 8;
    height: 1fr;
    margin-left: 1;
}
"""
