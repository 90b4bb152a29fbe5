"""Anthropic Claude LLM provider implementation.

Uses the Messages API of the official Anthropic Python SDK.
"""

from typing import Any

from anthropic import AsyncAnthropic

from ..base import LLMProvider
from ..models import Completion, TokenUsage

# The Messages API requires an explicit output limit
DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider.

    Hidden design decisions:
    - Anthropic API client initialization
    - Mandatory max_tokens
    - Replies arrive as a list of content blocks
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        super().__init__(model, temperature=temperature, max_tokens=max_tokens)
        self._client = AsyncAnthropic(api_key=api_key, base_url=base_url, **client_kwargs)

    async def _complete(self, prompt: str) -> Completion:
        response = await self._client.messages.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
            max_tokens=self._max_tokens or DEFAULT_MAX_TOKENS,
        )

        # Only text blocks carry reply text
        text = "".join(getattr(block, "text", "") for block in response.content)
        usage = None
        if response.usage:
            usage = TokenUsage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
            )
        return Completion(text=text, model=response.model, usage=usage)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
