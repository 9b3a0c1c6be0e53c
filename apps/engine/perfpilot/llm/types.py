"""Shared types for the LLM provider layer.

Provider-agnostic: callers only see `LLMMessage`, `LLMConfig`, `LLMResponse`.
Recommendation text is unstructured prose; nothing here assumes JSON output.
"""

from dataclasses import dataclass


@dataclass
class LLMConfig:
    """Per-call LLM configuration.

    api_key is read from settings at call time; never persisted.
    Defaults match the recommendation use case: short prose, low temperature.
    """

    provider: str  # "openai" | "anthropic"
    model: str     # e.g. "gpt-4o", "claude-sonnet-4-5"
    api_key: str
    max_tokens: int = 1000
    temperature: float = 0.3


@dataclass
class LLMMessage:
    """A single message in the conversation."""

    role: str     # "system" | "user" | "assistant"
    content: str


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass
class LLMResponse:
    """Structured response from any provider."""

    content: str
    model: str
    provider: str
    usage: TokenUsage
    finish_reason: str = "stop"            # "stop" | "length" | "error"

    def is_complete(self) -> bool:
        """Return True if the response completed normally."""
        return self.finish_reason == "stop"


# ---------------------------------------------------------------------------
# Available models registry (used by the /llm/models API endpoint)
# ---------------------------------------------------------------------------

AVAILABLE_MODELS: dict[str, list[str]] = {
    "openai": ["gpt-4o", "gpt-4o-mini"],
    "anthropic": ["claude-sonnet-4-5", "claude-haiku-4-5"],
}

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o"
