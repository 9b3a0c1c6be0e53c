"""Anthropic (Claude) LLM provider implementation.

The system message is passed through the dedicated `system` parameter;
all text content blocks in the reply are concatenated.
"""

import logging

from perfpilot.llm.provider import LLMProviderError
from perfpilot.llm.types import LLMConfig, LLMMessage, LLMResponse, TokenUsage

logger = logging.getLogger(__name__)


class AnthropicProvider:
    """Anthropic Messages API provider.

    Uses the anthropic Python SDK. Lazy-imports to avoid errors when
    the SDK is not installed.
    """

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig,
    ) -> LLMResponse:
        """Call the Anthropic Messages API."""
        try:
            import anthropic
        except ImportError as exc:
            raise LLMProviderError(
                "anthropic",
                "anthropic package not installed. Run: pip install anthropic",
                cause=exc,
            )

        client = anthropic.AsyncAnthropic(api_key=config.api_key)

        system_content = ""
        api_messages = []
        for msg in messages:
            if msg.role == "system":
                system_content = msg.content
            else:
                api_messages.append({"role": msg.role, "content": msg.content})

        kwargs: dict = {
            "model": config.model,
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
            "messages": api_messages,
        }
        if system_content:
            kwargs["system"] = system_content

        try:
            response = await client.messages.create(**kwargs)
        except anthropic.AuthenticationError as exc:
            raise LLMProviderError("anthropic", f"Auth failed: {exc}", cause=exc)
        except anthropic.RateLimitError as exc:
            raise LLMProviderError("anthropic", f"Rate limit: {exc}", cause=exc)
        except anthropic.APIError as exc:
            raise LLMProviderError("anthropic", f"API error: {exc}", cause=exc)

        text = "".join(block.text for block in response.content if block.type == "text")
        usage = response.usage

        # Anthropic reports "end_turn"; "max_tokens" maps to a truncated reply.
        if response.stop_reason == "end_turn":
            finish_reason = "stop"
        elif response.stop_reason == "max_tokens":
            finish_reason = "length"
        else:
            finish_reason = response.stop_reason or "stop"

        return LLMResponse(
            content=text,
            model=config.model,
            provider="anthropic",
            usage=TokenUsage(
                prompt_tokens=usage.input_tokens if usage else 0,
                completion_tokens=usage.output_tokens if usage else 0,
            ),
            finish_reason=finish_reason,
        )
