from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from .models import Completion


@runtime_checkable
class ModelClient(Protocol):
    """The capability the conversation engine consumes: text in, text out.

    Returns None (or an empty string) when the model produced nothing.
    Raises on any failure.
    """

    async def generate(self, prompt: str) -> str | None:
        ...


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which LLM provider to use.
    Implementations handle the provider-specific details:
    - API client setup and authentication
    - Request and reply format
    - Provider quirks such as empty responses

    Each request carries only the prompt; the conversation transcript is
    never replayed to the provider.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            text = await provider.generate("Hello")
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._last_completion: Completion | None = None

    @property
    def model(self) -> str:
        """Model used for every request."""
        return self._model

    @property
    def last_completion(self) -> Completion | None:
        """The most recent reply, including usage when the provider reports it."""
        return self._last_completion

    @abstractmethod
    async def _complete(self, prompt: str) -> Completion:
        """Send one prompt to the provider.

        Raises:
            Exception: Provider-specific errors (network, auth, quota)
        """

    async def generate(self, prompt: str) -> str | None:
        """Generate a reply to a single prompt.

        Returns:
            Generated text, or None if the provider returned nothing
        """
        completion = await self._complete(prompt)
        self._last_completion = completion
        return completion.text or None

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
