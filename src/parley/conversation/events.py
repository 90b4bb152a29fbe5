"""Events emitted by the conversation engine.

Hides how the presentation layer learns about engine changes: listeners
subscribe once and receive plain event objects, in emission order, on the
event loop that drives the controller.
"""

from collections.abc import Callable
from dataclasses import dataclass

from .models import Message, SessionState


@dataclass(frozen=True)
class StateChanged:
    """The controller moved to a new phase."""

    state: SessionState


@dataclass(frozen=True)
class TranscriptChanged:
    """A message was appended or the transcript was cleared."""

    messages: tuple[Message, ...]


@dataclass(frozen=True)
class TurnFailed:
    """The model call failed or returned nothing usable."""

    reason: str


@dataclass(frozen=True)
class PersistenceFailed:
    """A transcript write failed. Non-fatal; the next write reconciles."""

    reason: str


SessionEvent = StateChanged | TranscriptChanged | TurnFailed | PersistenceFailed
SessionListener = Callable[[SessionEvent], None]


class EventEmitter:
    """Minimal synchronous observer registry."""

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A function that removes the listener when called
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, event: SessionEvent) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event)

    def __len__(self) -> int:
        return len(self._listeners)
