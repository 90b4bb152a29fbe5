"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK.
Reference: https://github.com/googleapis/python-genai

Gemini sometimes answers with no text at all (safety filtering or service
hiccups). Those replies are retried a few times; if every attempt is empty
the empty text is returned and the conversation engine fails the turn.
"""

import asyncio
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import Completion, TokenUsage

RETRY_DELAY = 0.5  # seconds, multiplied by the attempt number


class GeminiProvider(LLMProvider):
    """Google Gemini provider.

    Hidden design decisions:
    - Google GenAI client initialization
    - Where text and usage live in a GenerateContentResponse
    - Retry logic for empty responses
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_retries: int = 3,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Model id (gemini-2.5-flash, gemini-2.5-pro, ...)
            max_retries: Attempts made when the reply is empty (at least 1)
            temperature: Sampling temperature
            max_tokens: Output token limit (None leaves it to the service)
            **client_kwargs: Additional kwargs for genai.Client
        """
        super().__init__(model, temperature=temperature, max_tokens=max_tokens)
        self._max_retries = max(1, max_retries)
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self._temperature,
            max_output_tokens=self._max_tokens,
        )

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Join the text parts of the first candidate, tolerating blocked replies."""
        if response.candidates:
            content = response.candidates[0].content
            if content and content.parts:
                texts = [part.text for part in content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        # response.text may raise or return None when blocked
        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    @staticmethod
    def _extract_usage(response: Any) -> TokenUsage | None:
        metadata = getattr(response, "usage_metadata", None)
        if metadata is None:
            return None
        return TokenUsage(
            prompt_tokens=metadata.prompt_token_count or 0,
            completion_tokens=metadata.candidates_token_count or 0,
        )

    async def _complete(self, prompt: str) -> Completion:
        config = self._config()
        text = ""
        usage = None

        for attempt in range(self._max_retries):
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
            usage = self._extract_usage(response)
            text = self._extract_text(response)
            if text:
                break
            if attempt < self._max_retries - 1:
                await asyncio.sleep(RETRY_DELAY * (attempt + 1))

        return Completion(text=text, model=self._model, usage=usage)

    async def close(self) -> None:
        """Nothing to release; the GenAI client opens connections per request."""
        pass
