"""Conversation session engine.

Module structure (each module hides a design decision):
- models.py: Message entity, persisted record schema, turn state
- errors.py: Failure taxonomy and its recovery policies
- events.py: How the presentation layer observes the engine
- store.py: Transcript ownership and the persistence round-trip
- controller.py: Turn-taking state machine
"""

from .controller import ConversationController
from .errors import (
    ConversationError,
    EmptyMessageError,
    ModelError,
    PersistenceError,
    SerializationError,
)
from .events import (
    PersistenceFailed,
    SessionEvent,
    SessionListener,
    StateChanged,
    TranscriptChanged,
    TurnFailed,
)
from .models import Message, MessageRecord, Role, SessionState, TurnPhase
from .store import DEFAULT_STORAGE_KEY, MessageStore

__all__ = [
    "ConversationController",
    "ConversationError",
    "DEFAULT_STORAGE_KEY",
    "EmptyMessageError",
    "Message",
    "MessageRecord",
    "MessageStore",
    "ModelError",
    "PersistenceError",
    "PersistenceFailed",
    "Role",
    "SerializationError",
    "SessionEvent",
    "SessionListener",
    "SessionState",
    "StateChanged",
    "TranscriptChanged",
    "TurnFailed",
    "TurnPhase",
]
