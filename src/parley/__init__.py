"""
Parley: a conversational client with a persistent transcript.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .config import SessionConfig, load_config_from_env
from .conversation import (
    ConversationController,
    Message,
    MessageStore,
    Role,
    SessionState,
    TurnPhase,
)
from .session import ChatSession, create_session

__all__ = [
    "ChatSession",
    "ConversationController",
    "Message",
    "MessageStore",
    "Role",
    "SessionConfig",
    "SessionState",
    "TurnPhase",
    "create_session",
    "load_config_from_env",
]
