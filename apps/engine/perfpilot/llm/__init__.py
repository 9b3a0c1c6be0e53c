"""LLM backends for recommendation generation.

Public API:
    provider_for(config) -> LLMProvider
    is_known_model(provider, model) -> bool
    LLMConfig, LLMMessage, LLMResponse, TokenUsage
    AVAILABLE_MODELS, DEFAULT_PROVIDER, DEFAULT_MODEL
"""

from perfpilot.llm.provider import LLMProvider, LLMProviderError, UnknownProviderError
from perfpilot.llm.registry import PROVIDERS, is_known_model, provider_for
from perfpilot.llm.types import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    LLMConfig,
    LLMMessage,
    LLMResponse,
    TokenUsage,
)

__all__ = [
    "provider_for",
    "is_known_model",
    "PROVIDERS",
    "LLMProvider",
    "LLMProviderError",
    "UnknownProviderError",
    "LLMConfig",
    "LLMMessage",
    "LLMResponse",
    "TokenUsage",
    "AVAILABLE_MODELS",
    "DEFAULT_PROVIDER",
    "DEFAULT_MODEL",
]
