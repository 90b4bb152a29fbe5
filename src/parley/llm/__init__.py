from .base import LLMProvider, ModelClient
from .factory import SUPPORTED_PROVIDERS, create_llm_provider
from .models import Completion, TokenUsage
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "ModelClient",
    "SUPPORTED_PROVIDERS",
    "create_llm_provider",
    "Completion",
    "TokenUsage",
    "AnthropicProvider",
    "GeminiProvider",
    "OpenAIProvider",
]
