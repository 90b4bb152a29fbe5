"""OpenAI LLM provider implementation.

Uses the Chat Completions API of the official OpenAI SDK. Also serves
OpenAI-compatible endpoints through base_url.
"""

from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import Completion, TokenUsage


class OpenAIProvider(LLMProvider):
    """OpenAI provider.

    Hidden design decisions:
    - OpenAI API client initialization
    - Optional parameters omitted from the request when unset
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model id
            base_url: Optional custom API base URL
            organization: Optional organization ID
            temperature: Sampling temperature
            max_tokens: Output token limit
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(model, temperature=temperature, max_tokens=max_tokens)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    async def _complete(self, prompt: str) -> Completion:
        request: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._temperature,
        }
        if self._max_tokens is not None:
            request["max_tokens"] = self._max_tokens

        response = await self._client.chat.completions.create(**request)

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        usage = None
        if response.usage:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
            )
        return Completion(text=text, model=response.model, usage=usage)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
