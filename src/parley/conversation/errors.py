"""Exception hierarchy for the conversation engine.

Each failure class maps to one recovery policy:
- EmptyMessageError: silent no-op in the controller
- ModelError: surfaced as a TurnFailed event, controller returns to idle
- SerializationError: the offending record is skipped during load
- PersistenceError: propagated by the store, reported as a warning by the controller
"""


class ConversationError(Exception):
    """Base class for all conversation engine errors."""


class EmptyMessageError(ConversationError):
    """Submitted text is empty or whitespace only."""


class ModelError(ConversationError):
    """The model client failed or produced no usable text."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SerializationError(ConversationError):
    """A persisted record could not be decoded into a message."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class PersistenceError(ConversationError):
    """The persistence adapter failed to read or write the transcript."""
