"""Data models for the conversation engine.

These models define the transcript entity, its persisted record schema,
and the transient turn state. They are independent of the storage backend
and of the model provider.
"""

import json
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import EmptyMessageError, SerializationError


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single turn in the transcript. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who authored the message")
    text: str = Field(description="Message body")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER

    @classmethod
    def user(cls, text: str) -> "Message":
        """Create a user-authored message stamped with the current time."""
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        """Create an assistant message stamped with the current time."""
        return cls(role=Role.ASSISTANT, text=text)


class MessageRecord(BaseModel):
    """Persisted form of a message.

    Field names match the on-disk schema:
        {"isUser": bool, "message": str, "date": ISO-8601 str}

    Validation is strict: a number is not a bool, a bool is not a string.
    Unknown fields are ignored so newer writers stay readable.
    """

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)

    is_user: bool = Field(alias="isUser")
    message: str
    date: datetime


def encode_message(message: Message) -> str:
    """Serialize a message to its persisted JSON record."""
    return json.dumps(
        {
            "isUser": message.is_user,
            "message": message.text,
            "date": message.timestamp.isoformat(),
        },
        ensure_ascii=False,
    )


def decode_message(raw: str, index: int | None = None) -> Message:
    """Parse a persisted JSON record into a message.

    Args:
        raw: One stored record
        index: Position of the record in the stored list, for error context

    Returns:
        The decoded message

    Raises:
        SerializationError: If the record is not valid JSON or does not match the schema
    """
    try:
        record = MessageRecord.model_validate_json(raw)
    except ValidationError as e:
        where = f"record {index}" if index is not None else "record"
        raise SerializationError(
            f"Malformed {where}: {e.error_count()} validation error(s): "
            f"{'; '.join(err['msg'] for err in e.errors())}",
            index=index,
        ) from e

    return Message(
        role=Role.USER if record.is_user else Role.ASSISTANT,
        text=record.message,
        timestamp=record.date,
    )


def validate_user_text(text: str | None) -> str:
    """Check that submitted text has visible content.

    Returns:
        The text unchanged

    Raises:
        EmptyMessageError: If the text is None, empty or whitespace only
    """
    if text is None or not text.strip():
        raise EmptyMessageError("Message text is empty")
    return text


class TurnPhase(str, Enum):
    """Phase of the turn-taking state machine."""

    IDLE = "idle"
    SENDING = "sending"                        # user message appended, write pending
    AWAITING_RESPONSE = "awaiting_response"    # waiting on the model client
    ERROR = "error"                            # turn failed, returns to idle immediately


class SessionState(BaseModel):
    """Current controller state. Never persisted."""

    model_config = ConfigDict(frozen=True)

    phase: TurnPhase = TurnPhase.IDLE
    reason: str | None = Field(default=None, description="Failure reason, only set in ERROR")

    @property
    def loading(self) -> bool:
        """True while a turn is in flight."""
        return self.phase in (TurnPhase.SENDING, TurnPhase.AWAITING_RESPONSE)

    @classmethod
    def idle(cls) -> "SessionState":
        return cls(phase=TurnPhase.IDLE)

    @classmethod
    def error(cls, reason: str) -> "SessionState":
        return cls(phase=TurnPhase.ERROR, reason=reason)
