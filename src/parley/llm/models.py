from pydantic import BaseModel, ConfigDict, Field


class TokenUsage(BaseModel):
    """Token accounting reported by a provider for one request."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class Completion(BaseModel):
    """One provider reply to a single prompt."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Generated text, empty when the model produced nothing")
    model: str = Field(description="Model that generated the reply")
    usage: TokenUsage | None = Field(default=None, description="Token usage, if reported")
