"""Unit tests for the message models and record codec."""
import json
from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from parley.conversation import (
    EmptyMessageError,
    Message,
    Role,
    SerializationError,
    SessionState,
    TurnPhase,
)
from parley.conversation.models import (
    decode_message,
    encode_message,
    validate_user_text,
)


class TestMessage:
    """Tests for the Message entity."""

    def test_user_factory(self):
        """Test that Message.user builds a user-authored message."""
        message = Message.user("Hi")

        assert message.role == Role.USER
        assert message.is_user
        assert message.text == "Hi"
        assert isinstance(message.timestamp, datetime)

    def test_assistant_factory(self):
        """Test that Message.assistant builds a model-authored message."""
        message = Message.assistant("Hello!")

        assert message.role == Role.ASSISTANT
        assert not message.is_user

    def test_message_is_immutable(self):
        """Test that messages cannot be changed after creation."""
        message = Message.user("Hi")

        with pytest.raises(ValueError):
            message.text = "changed"  # type: ignore


class TestRecordCodec:
    """Tests for encoding and decoding persisted records."""

    def test_encode_uses_stored_field_names(self):
        """Test that the record carries isUser, message and date."""
        message = Message(
            role=Role.USER,
            text="Hi",
            timestamp=datetime(2024, 5, 1, 9, 30, 0),
        )

        record = json.loads(encode_message(message))

        assert record == {
            "isUser": True,
            "message": "Hi",
            "date": "2024-05-01T09:30:00",
        }

    def test_encode_keeps_non_ascii_text(self):
        """Test that text is stored without escaping."""
        raw = encode_message(Message.assistant("Grüße 👋"))

        assert "Grüße 👋" in raw

    def test_decode_millisecond_timestamps(self):
        """Test decoding a record written with millisecond precision."""
        raw = '{"isUser": false, "message": "Hello!", "date": "2024-05-01T09:30:00.123"}'

        message = decode_message(raw)

        assert message.role == Role.ASSISTANT
        assert message.text == "Hello!"
        assert message.timestamp == datetime(2024, 5, 1, 9, 30, 0, 123000)

    def test_decode_ignores_unknown_fields(self):
        """Test that extra fields in a record are ignored."""
        raw = '{"isUser": true, "message": "Hi", "date": "2024-05-01T09:30:00", "id": 7}'

        message = decode_message(raw)

        assert message.is_user
        assert message.text == "Hi"

    @pytest.mark.parametrize("raw", [
        "not json",
        "[]",
        '{"message": "Hi", "date": "2024-05-01T09:30:00"}',
        '{"isUser": true, "date": "2024-05-01T09:30:00"}',
        '{"isUser": true, "message": "Hi"}',
        '{"isUser": 1, "message": "Hi", "date": "2024-05-01T09:30:00"}',
        '{"isUser": "true", "message": "Hi", "date": "2024-05-01T09:30:00"}',
        '{"isUser": true, "message": 42, "date": "2024-05-01T09:30:00"}',
        '{"isUser": true, "message": "Hi", "date": "yesterday"}',
    ])
    def test_decode_malformed_record_fails(self, raw: str):
        """Test that records not matching the schema raise SerializationError."""
        with pytest.raises(SerializationError):
            decode_message(raw)

    def test_decode_error_carries_index(self):
        """Test that the record position is attached to the error."""
        with pytest.raises(SerializationError) as exc_info:
            decode_message("{}", index=3)

        assert exc_info.value.index == 3
        assert "record 3" in str(exc_info.value)

    @given(
        st.booleans(),
        st.text(),
        st.datetimes(min_value=datetime(1970, 1, 1), max_value=datetime(2100, 1, 1)),
    )
    def test_round_trip_preserves_message(self, is_user: bool, text: str, timestamp: datetime):
        """Property test: decode(encode(m)) == m."""
        message = Message(
            role=Role.USER if is_user else Role.ASSISTANT,
            text=text,
            timestamp=timestamp,
        )

        assert decode_message(encode_message(message)) == message


class TestValidateUserText:
    """Tests for user input validation."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_text_rejected(self, text):
        """Test that empty or whitespace-only text is rejected."""
        with pytest.raises(EmptyMessageError):
            validate_user_text(text)

    def test_text_returned_unchanged(self):
        """Test that valid text is not stripped."""
        assert validate_user_text("  Hi  ") == "  Hi  "


class TestSessionState:
    """Tests for SessionState."""

    @pytest.mark.parametrize("phase,loading", [
        (TurnPhase.IDLE, False),
        (TurnPhase.SENDING, True),
        (TurnPhase.AWAITING_RESPONSE, True),
        (TurnPhase.ERROR, False),
    ])
    def test_loading_follows_phase(self, phase: TurnPhase, loading: bool):
        """Test that loading is true only while a turn is in flight."""
        assert SessionState(phase=phase).loading is loading

    def test_error_state_carries_reason(self):
        """Test the error constructor."""
        state = SessionState.error("boom")

        assert state.phase == TurnPhase.ERROR
        assert state.reason == "boom"
