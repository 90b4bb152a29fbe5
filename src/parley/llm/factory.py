from typing import Any

from .base import LLMProvider
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")

_PROVIDER_CLASSES: dict[str, type[LLMProvider]] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "claude": AnthropicProvider,
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: 'gemini', 'openai', 'anthropic' (or its alias 'claude')
        **config: Passed to the provider constructor. Every provider needs
            api_key; model, temperature and max_tokens are optional.
            Gemini also takes max_retries, OpenAI base_url and organization,
            Anthropic base_url.

    Raises:
        ValueError: If provider type is not supported
        TypeError: If api_key is missing

    Examples:
        >>> provider = create_llm_provider("gemini", api_key="...")
    """
    provider_class = _PROVIDER_CLASSES.get(provider.lower())
    if provider_class is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    if "api_key" not in config:
        raise TypeError(f"{provider_class.__name__} requires 'api_key' in config")
    return provider_class(**config)
