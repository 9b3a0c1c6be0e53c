"""LLM-backed recommendation generation.

Public API:
    generate_recommendations(analysis, code="", filename=None, config=..., provider=...)
    Recommendations
"""

from perfpilot.recommendations.generator import (
    Recommendations,
    fallback_recommendations,
    generate_recommendations,
    parse_recommendations,
)

__all__ = [
    "generate_recommendations",
    "parse_recommendations",
    "fallback_recommendations",
    "Recommendations",
]
