"""Backend interface for recommendation completions.

A backend turns the system + user prompt built by the recommendation
generator into prose. Any failure is reported as `LLMProviderError`, which
the generator treats as "use the rule-based recommendations instead".
"""

from typing import Optional, Protocol

from perfpilot.llm.types import LLMConfig, LLMMessage, LLMResponse


class LLMProvider(Protocol):
    async def complete(self, messages: list[LLMMessage], config: LLMConfig) -> LLMResponse:
        ...


class LLMProviderError(Exception):
    """A backend call could not produce recommendations.

    Covers a missing SDK, rejected credentials, rate limiting and API
    errors. `provider` names the backend for the warning log line.
    """

    def __init__(self, provider: str, message: str, cause: Optional[Exception] = None):
        self.provider = provider
        self.cause = cause
        super().__init__(f"[{provider}] {message}")


class UnknownProviderError(LLMProviderError):
    """The configured provider name has no backend."""

    def __init__(self, provider: str, known: list[str]):
        self.known = known
        super().__init__(
            provider,
            f"Unknown provider '{provider}'. Valid options: {', '.join(known)}",
        )
