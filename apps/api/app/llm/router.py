"""LLM configuration endpoints.

Routes:
  GET /llm/models  list available recommendation models grouped by provider

Static catalogue; also reports which provider/model the server is
configured to use and whether a key is present (never the key itself).
"""

from fastapi import APIRouter, Depends

from perfpilot.llm import AVAILABLE_MODELS

from app.core.config import Settings, get_settings

router = APIRouter(prefix="/llm", tags=["llm"])

MODEL_DETAILS: dict[str, dict[str, str]] = {
    "gpt-4o": {"label": "GPT-4o", "description": "Default recommendation model"},
    "gpt-4o-mini": {"label": "GPT-4o Mini", "description": "Faster, lower cost"},
    "claude-sonnet-4-5": {
        "label": "Claude Sonnet 4.5",
        "description": "Detailed, well-structured recommendations",
    },
    "claude-haiku-4-5": {"label": "Claude Haiku 4.5", "description": "Fastest, lowest cost"},
}

PROVIDER_LABELS = {"openai": "OpenAI", "anthropic": "Anthropic"}


@router.get("/models")
async def list_models(app_settings: Settings = Depends(get_settings)) -> dict:
    """Return all available LLM models grouped by provider."""
    return {
        "providers": [
            {
                "id": provider_id,
                "label": PROVIDER_LABELS.get(provider_id, provider_id.capitalize()),
                "models": [
                    {"id": model_id, **MODEL_DETAILS.get(model_id, {"label": model_id, "description": ""})}
                    for model_id in models
                ],
            }
            for provider_id, models in AVAILABLE_MODELS.items()
        ],
        "active": {
            "provider": app_settings.llm_provider,
            "model": app_settings.llm_model,
            "configured": bool(app_settings.llm_api_key()),
        },
    }
