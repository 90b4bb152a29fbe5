"""UI settings shared by the widgets, the app and the CLI log printer.

Hides the numeric log thresholds and display timings from the rest of
the UI code.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of an engine trace line; higher is more severe.

    Engine callbacks report levels as lowercase strings. A panel or
    printer shows a line when its level is at or above the threshold.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, value: str) -> "LogLevel":
        """Parse a level name case-insensitively; unknown names mean DEBUG."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return cls.DEBUG


# Rich styles used when drawing trace lines
LEVEL_STYLES = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
COMPONENT_STYLES = {
    "Controller": "magenta",
    "Session": "green",
    "Store": "bright_green",
    "TUI": "cyan",
}

RECALL_LIMIT = 100  # submitted inputs kept for Up/Down recall

BUBBLE_TIME_FORMAT = "%H:%M"
TRACE_TIME_FORMAT = "%H:%M:%S"

# Toast durations in seconds
NOTIFY_SHORT = 2
NOTIFY_ERROR = 5
