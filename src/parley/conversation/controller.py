"""Turn-taking state machine for a single conversation.

The controller is the only component that calls the model client and the
only one that mutates the transcript in response to user intent. It
suspends at two points per step: the transcript write and the model call.

States:
    IDLE -> SENDING -> AWAITING_RESPONSE -> IDLE
                                         -> ERROR -> IDLE
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..llm import ModelClient
from .errors import EmptyMessageError, ModelError, PersistenceError
from .events import (
    EventEmitter,
    PersistenceFailed,
    SessionListener,
    StateChanged,
    TranscriptChanged,
    TurnFailed,
)
from .models import Message, SessionState, TurnPhase, validate_user_text
from .store import MessageStore

EMPTY_RESPONSE_REASON = "empty response"


class ConversationController:
    """Drives one linear conversation.

    At most one turn is in flight: a send issued while a turn is running is
    rejected, not queued. Clearing is allowed at any time; a response that
    belongs to a cleared conversation is discarded using the generation
    number captured when the turn started.
    """

    def __init__(
        self,
        store: MessageStore,
        client: ModelClient,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Transcript owner
            client: Model capability used for replies
            request_timeout: Seconds before a model call counts as failed (None waits forever)
        """
        self._store = store
        self._client = client
        self._request_timeout = request_timeout
        self._state = SessionState.idle()
        self._generation = 0
        self._last_error: TurnFailed | None = None
        self._events = EventEmitter()
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for turn logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Controller", message)

    # --------- observable surface ----------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def generation(self) -> int:
        """Conversation instance counter, bumped on every clear."""
        return self._generation

    @property
    def last_error(self) -> TurnFailed | None:
        """Most recent failed turn, if any."""
        return self._last_error

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._store.snapshot()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Subscribe to state, transcript and failure events.

        Returns:
            A function that unsubscribes the listener
        """
        return self._events.subscribe(listener)

    # --------- intents ----------
    async def send_user_message(self, text: str) -> bool:
        """Run one turn: record the user's text, ask the model, record the reply.

        Args:
            text: The user's submission

        Returns:
            True if an assistant reply was appended
        """
        if self._state.phase is not TurnPhase.IDLE:
            self._debug("debug", f"Send rejected, turn already {self._state.phase.value}")
            return False

        try:
            validate_user_text(text)
        except EmptyMessageError:
            return False

        generation = self._generation
        try:
            return await self._run_turn(text, generation)
        finally:
            # Cancellation or a raising listener must not leave the turn open
            if self._state.phase is not TurnPhase.IDLE:
                self._debug("warning", f"Turn interrupted during {self._state.phase.value}")
                self._set_state(SessionState.idle())

    async def clear_conversation(self) -> None:
        """Empty the transcript and persist the empty list.

        Does not cancel an in-flight model call; its result is discarded.
        """
        self._generation += 1
        self._store.clear()
        self._events.emit(TranscriptChanged(self._store.snapshot()))
        self._debug("info", f"Conversation cleared (generation {self._generation})")
        await self._persist()

    # --------- internals ----------
    async def _run_turn(self, text: str, generation: int) -> bool:
        self._append(Message.user(text))
        self._set_state(SessionState(phase=TurnPhase.SENDING))
        await self._persist()

        if generation != self._generation:
            self._debug("info", "Conversation cleared before the request was sent, dropping turn")
            self._set_state(SessionState.idle())
            return False

        self._set_state(SessionState(phase=TurnPhase.AWAITING_RESPONSE))
        try:
            reply = await self._generate(text)
        except ModelError as e:
            if generation != self._generation:
                self._debug("info", f"Ignoring failure from a cleared conversation: {e.reason}")
                self._set_state(SessionState.idle())
                return False
            self._fail(e.reason)
            return False

        if generation != self._generation:
            self._debug("info", "Discarding response that arrived after the conversation was cleared")
            self._set_state(SessionState.idle())
            return False

        self._append(Message.assistant(reply))
        await self._persist()
        self._set_state(SessionState.idle())
        return True

    async def _generate(self, prompt: str) -> str:
        """Call the model and normalize every failure into a ModelError."""
        try:
            if self._request_timeout is not None:
                reply = await asyncio.wait_for(
                    self._client.generate(prompt), timeout=self._request_timeout
                )
            else:
                reply = await self._client.generate(prompt)
        except TimeoutError as e:
            if self._request_timeout is None:
                raise ModelError(str(e) or "model request timed out") from e
            raise ModelError(
                f"model request timed out after {self._request_timeout:g}s"
            ) from e
        except Exception as e:
            raise ModelError(str(e) or type(e).__name__) from e

        self._trace_usage()
        if not reply or not reply.strip():
            raise ModelError(EMPTY_RESPONSE_REASON)
        return reply

    def _trace_usage(self) -> None:
        # Only LLMProvider clients report a completion; plain ModelClients do not
        completion = getattr(self._client, "last_completion", None)
        usage = getattr(completion, "usage", None)
        if usage is None:
            return
        self._debug(
            "debug",
            f"Reply from {completion.model}: {usage.prompt_tokens} prompt + "
            f"{usage.completion_tokens} completion = {usage.total_tokens} tokens",
        )

    async def _persist(self) -> None:
        try:
            await self._store.persist()
        except PersistenceError as e:
            self._debug("warning", f"Transcript not saved: {e}")
            self._events.emit(PersistenceFailed(str(e)))

    def _append(self, message: Message) -> None:
        self._store.append(message)
        self._events.emit(TranscriptChanged(self._store.snapshot()))

    def _fail(self, reason: str) -> None:
        self._debug("error", f"Turn failed: {reason}")
        failure = TurnFailed(reason)
        self._last_error = failure
        self._set_state(SessionState.error(reason))
        self._events.emit(failure)
        self._set_state(SessionState.idle())

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        self._events.emit(StateChanged(state))
