"""OpenAI LLM provider implementation.

Uses the chat completions API and returns the first choice's text as-is.
"""

import logging

from perfpilot.llm.provider import LLMProviderError
from perfpilot.llm.types import LLMConfig, LLMMessage, LLMResponse, TokenUsage

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """OpenAI chat completions provider.

    Uses the openai Python SDK (>=1.0). Lazy-imports so the module can be
    loaded when only the Anthropic SDK is installed.
    """

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig,
    ) -> LLMResponse:
        """Call the OpenAI chat completions API."""
        try:
            import openai
        except ImportError as exc:
            raise LLMProviderError(
                "openai",
                "openai package not installed. Run: pip install openai",
                cause=exc,
            )

        client = openai.AsyncOpenAI(api_key=config.api_key)

        try:
            response = await client.chat.completions.create(
                model=config.model,
                messages=[{"role": m.role, "content": m.content} for m in messages],
                max_tokens=config.max_tokens,
                temperature=config.temperature,
            )
        except openai.AuthenticationError as exc:
            raise LLMProviderError("openai", f"Auth failed: {exc}", cause=exc)
        except openai.RateLimitError as exc:
            raise LLMProviderError("openai", f"Rate limit: {exc}", cause=exc)
        except openai.APIError as exc:
            raise LLMProviderError("openai", f"API error: {exc}", cause=exc)

        choice = response.choices[0]
        usage = response.usage

        return LLMResponse(
            content=choice.message.content or "",
            model=config.model,
            provider="openai",
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
            ),
            finish_reason=choice.finish_reason or "stop",
        )
