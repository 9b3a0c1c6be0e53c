"""Tests for recommendation generation.

The LLM is replaced by an AsyncMock provider; no network access.
"""

from unittest.mock import AsyncMock, MagicMock, patch

from perfpilot.analyzer import analyze_code, analyze_files
from perfpilot.llm.provider import LLMProviderError
from perfpilot.llm.types import LLMConfig, LLMResponse, TokenUsage
from perfpilot.recommendations import (
    generate_recommendations,
    parse_recommendations,
)
from perfpilot.recommendations.generator import NO_ISSUES_SUMMARY
from perfpilot.recommendations.prompts import (
    CODE_SNIPPET_LIMIT,
    multi_file_prompt,
    single_file_prompt,
)

IMG_AND_FONT = "@font-face { font-family: X; }\n<img src='/a.png' />"

LLM_REPLY = """Summary: Your page ships unoptimized images and fonts.

Recommendations:
1. Use next/image for all images.
2. Load fonts through next/font.
3. Add width and height to images."""


def _config() -> LLMConfig:
    return LLMConfig(provider="openai", model="gpt-4o", api_key="test-key")


def _provider(content: str = LLM_REPLY) -> MagicMock:
    provider = MagicMock()
    provider.complete = AsyncMock(
        return_value=LLMResponse(
            content=content,
            model="gpt-4o",
            provider="openai",
            usage=TokenUsage(prompt_tokens=10, completion_tokens=20),
        )
    )
    return provider


class TestGenerateRecommendations:
    async def test_no_issues_skips_llm(self) -> None:
        provider = _provider()
        recs = await generate_recommendations(
            analyze_code("const x = 1;"), "const x = 1;", config=_config(), provider=provider
        )

        assert recs.summary == NO_ISSUES_SUMMARY
        assert recs.recommendations == []
        provider.complete.assert_not_awaited()

    async def test_llm_reply_is_parsed(self) -> None:
        provider = _provider()
        recs = await generate_recommendations(
            analyze_code(IMG_AND_FONT), IMG_AND_FONT, "page.tsx",
            config=_config(), provider=provider,
        )

        assert recs.source == "llm"
        assert recs.summary == "Your page ships unoptimized images and fonts."
        assert recs.recommendations == [
            "Use next/image for all images.",
            "Load fonts through next/font.",
            "Add width and height to images.",
        ]

    async def test_single_file_prompt_sent(self) -> None:
        provider = _provider()
        await generate_recommendations(
            analyze_code(IMG_AND_FONT), IMG_AND_FONT, "page.tsx",
            config=_config(), provider=provider,
        )

        messages, config = provider.complete.call_args.args
        assert messages[0].role == "system"
        assert "PerfPilot AI" in messages[0].content
        assert "Code filename: page.tsx" in messages[1].content
        assert "HTML img tag usage" in messages[1].content
        assert config.model == "gpt-4o"

    async def test_multi_file_prompt_lists_files(self) -> None:
        provider = _provider()
        result = analyze_files({"a.tsx": "<img src='/a.png' />", "b.css": "@font-face {}"})
        await generate_recommendations(result, config=_config(), provider=provider)

        prompt = provider.complete.call_args.args[0][1].content
        assert "Files analyzed: a.tsx, b.css" in prompt
        assert "(in a.tsx)" in prompt
        assert "(in b.css)" in prompt

    async def test_missing_api_key_uses_fallback(self) -> None:
        provider = _provider()
        config = LLMConfig(provider="openai", model="gpt-4o", api_key="")
        recs = await generate_recommendations(
            analyze_code(IMG_AND_FONT), IMG_AND_FONT, config=config, provider=provider
        )

        provider.complete.assert_not_awaited()
        assert recs.source == "fallback"

    async def test_no_config_uses_fallback(self) -> None:
        recs = await generate_recommendations(analyze_code(IMG_AND_FONT), IMG_AND_FONT)

        assert recs.source == "fallback"
        assert recs.summary == "Found 2 performance issues (1 critical, 1 warning, 0 info)."
        # Most severe first
        assert recs.recommendations[0].startswith("HTML img tag usage:")
        assert recs.recommendations[1].startswith("Font without next/font:")

    async def test_provider_error_uses_fallback(self) -> None:
        provider = MagicMock()
        provider.complete = AsyncMock(side_effect=LLMProviderError("openai", "Rate limit"))

        recs = await generate_recommendations(
            analyze_code(IMG_AND_FONT), IMG_AND_FONT, config=_config(), provider=provider
        )

        assert recs.source == "fallback"
        assert len(recs.recommendations) == 2

    async def test_backend_resolved_from_config(self) -> None:
        config = LLMConfig(provider="anthropic", model="claude-haiku-4-5", api_key="key")
        backend = _provider()
        with patch(
            "perfpilot.recommendations.generator.provider_for", return_value=backend
        ) as mock_for:
            recs = await generate_recommendations(
                analyze_code(IMG_AND_FONT), IMG_AND_FONT, config=config
            )

        mock_for.assert_called_once_with(config)
        assert backend.complete.await_args.args[1] is config
        assert recs.source == "llm"

    async def test_unknown_provider_name_uses_fallback(self) -> None:
        config = LLMConfig(provider="nope", model="x", api_key="key")
        recs = await generate_recommendations(analyze_code(IMG_AND_FONT), IMG_AND_FONT, config=config)
        assert recs.source == "fallback"

    async def test_to_dict_shape(self) -> None:
        recs = await generate_recommendations(analyze_code(IMG_AND_FONT), IMG_AND_FONT)
        assert set(recs.to_dict()) == {"summary", "recommendations"}


class TestParseRecommendations:
    def test_without_markers_whole_text_is_summary(self) -> None:
        recs = parse_recommendations("Just some prose.")
        assert recs.summary == "Just some prose."
        assert recs.recommendations == []

    def test_summary_only(self) -> None:
        recs = parse_recommendations("Summary: all good")
        assert recs.summary == "all good"
        assert recs.recommendations == []

    def test_recommendations_without_numbering(self) -> None:
        recs = parse_recommendations("Summary: x\nRecommendations: do the thing")
        assert recs.recommendations == ["do the thing"]


class TestPrompts:
    def test_code_snippet_truncated(self) -> None:
        code = "a" * (CODE_SNIPPET_LIMIT + 500)
        result = analyze_code("<img src='/a.png' />")
        prompt = single_file_prompt(result.issues, result.summary, code, "big.tsx")

        assert "a" * CODE_SNIPPET_LIMIT + "..." in prompt
        assert "a" * (CODE_SNIPPET_LIMIT + 1) not in prompt

    def test_issue_lines_include_line_numbers(self) -> None:
        result = analyze_code("<img src='/a.png' />")
        prompt = single_file_prompt(result.issues, result.summary, "", None)

        assert "Code filename: Unknown" in prompt
        assert "(Line 1)" in prompt
        assert "- Critical issues: 1" in prompt

    def test_multi_file_prompt_summary_block(self) -> None:
        result = analyze_files({"a.tsx": "<img src='/a.png' />", "b.tsx": "<img src='/b.png' />"})
        prompt = multi_file_prompt(result)
        assert "- Total issues: 2" in prompt
