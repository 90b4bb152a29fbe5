"""Session configuration.

Credentials, the model identifier and the storage location are injected
here at construction time and never embedded in source. The CLI builds a
SessionConfig from environment variables (optionally loaded from .env).
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_DATA_DIR = Path("~/.parley")

# Environment variable holding the API key for each provider
API_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

# Environment variable overriding the default model for each provider
MODEL_ENV = {
    "gemini": "GEMINI_MODEL",
    "openai": "OPENAI_CHAT_MODEL",
    "anthropic": "ANTHROPIC_MODEL",
    "claude": "ANTHROPIC_MODEL",
}

STORAGE_BACKENDS = ("memory", "sqlite", "file")


class SessionConfig(BaseModel):
    """Everything needed to build a ChatSession."""

    provider: str = Field(default="gemini", description="LLM provider name")
    api_key: str | None = Field(default=None, description="Provider API key")
    model: str | None = Field(default=None, description="Model id (provider default when None)")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, ge=1)
    request_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before a model call counts as failed"
    )
    storage_backend: str = Field(default="sqlite", description="memory, sqlite or file")
    storage_path: Path | None = Field(default=None, description="Database or preferences file")
    storage_key: str = Field(default="messages", min_length=1)

    @field_validator("provider", "storage_backend")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("storage_backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        if value not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage backend: {value}. "
                f"Supported backends: {', '.join(STORAGE_BACKENDS)}"
            )
        return value

    def resolved_storage_path(self) -> Path | None:
        """Storage location for the configured backend (None for memory)."""
        if self.storage_backend == "memory":
            return None
        if self.storage_path is not None:
            return self.storage_path.expanduser()
        filename = "parley.db" if self.storage_backend == "sqlite" else "preferences.json"
        return (DEFAULT_DATA_DIR / filename).expanduser()


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_config_from_env(**overrides: object) -> SessionConfig:
    """Build a SessionConfig from environment variables.

    Args:
        **overrides: Values that take precedence over the environment
            (None values are ignored)

    Environment variables:
        PARLEY_PROVIDER: gemini, openai or anthropic (default: gemini)
        GEMINI_API_KEY / OPENAI_API_KEY / ANTHROPIC_API_KEY: provider key
        GEMINI_MODEL / OPENAI_CHAT_MODEL / ANTHROPIC_MODEL: provider model
        PARLEY_TEMPERATURE: sampling temperature (default: 0.7)
        PARLEY_MAX_TOKENS: output token limit
        PARLEY_REQUEST_TIMEOUT: seconds before a model call fails
        PARLEY_STORAGE: memory, sqlite or file (default: sqlite)
        PARLEY_STORAGE_PATH: database or preferences file path
        PARLEY_STORAGE_KEY: key holding the transcript (default: messages)

    Raises:
        pydantic.ValidationError: If a value is out of range or malformed
    """
    provider = str(overrides.get("provider") or os.getenv("PARLEY_PROVIDER", "gemini")).lower()

    values: dict[str, object] = {
        "provider": provider,
        "api_key": _optional_env(API_KEY_ENV[provider]) if provider in API_KEY_ENV else None,
        "model": _optional_env(MODEL_ENV[provider]) if provider in MODEL_ENV else None,
        "temperature": _optional_env("PARLEY_TEMPERATURE"),
        "max_tokens": _optional_env("PARLEY_MAX_TOKENS"),
        "request_timeout": _optional_env("PARLEY_REQUEST_TIMEOUT"),
        "storage_backend": _optional_env("PARLEY_STORAGE"),
        "storage_path": _optional_env("PARLEY_STORAGE_PATH"),
        "storage_key": _optional_env("PARLEY_STORAGE_KEY"),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    # Unset values fall back to the model defaults
    return SessionConfig(**{key: value for key, value in values.items() if value is not None})
