"""Backend selection for recommendation generation.

The backend is picked from the same `LLMConfig` that carries the API key,
so a key for one vendor is never sent to another vendor's client. SDKs are
imported by each backend on first call, so both classes load without
either SDK installed.
"""

from perfpilot.llm.anthropic_provider import AnthropicProvider
from perfpilot.llm.openai_provider import OpenAIProvider
from perfpilot.llm.provider import LLMProvider, UnknownProviderError
from perfpilot.llm.types import AVAILABLE_MODELS, LLMConfig

PROVIDERS: dict[str, type] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def provider_for(config: LLMConfig) -> LLMProvider:
    """Instantiate the backend named by `config.provider` (case-insensitive).

    Raises:
        UnknownProviderError: no backend is registered under that name.
    """
    provider_cls = PROVIDERS.get(config.provider.lower())
    if provider_cls is None:
        raise UnknownProviderError(config.provider, sorted(PROVIDERS))
    return provider_cls()


def is_known_model(provider: str, model: str) -> bool:
    """True when `model` is listed for `provider` in AVAILABLE_MODELS."""
    return model in AVAILABLE_MODELS.get(provider.lower(), [])
