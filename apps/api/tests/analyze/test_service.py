"""Tests for the analyze service: LLM config and pipeline threading."""

import logging
import threading
from unittest.mock import patch

from perfpilot.analyzer import analyze_code
from perfpilot.bundle import analyze_bundle

from app.analyze.schemas import AnalyzeRequest
from app.analyze.service import llm_config_from_settings, run_analysis
from app.core.config import Settings

IMG_CODE = "<img src='/a.png' />"


def _settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "openai_api_key": "sk-test",
        "anthropic_api_key": "",
        "llm_provider": "openai",
        "llm_model": "gpt-4o",
    }
    values.update(overrides)
    return Settings(**values)


class TestLLMConfigFromSettings:
    def test_no_key_returns_none(self) -> None:
        assert llm_config_from_settings(_settings(openai_api_key="")) is None

    def test_known_model_builds_config_quietly(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="app.analyze.service"):
            config = llm_config_from_settings(_settings())

        assert config is not None
        assert (config.provider, config.model, config.api_key) == ("openai", "gpt-4o", "sk-test")
        assert caplog.records == []

    def test_unknown_model_warns_and_is_still_used(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="app.analyze.service"):
            config = llm_config_from_settings(_settings(llm_model="gpt-9-preview"))

        assert config is not None
        assert config.model == "gpt-9-preview"
        assert "gpt-9-preview" in caplog.text
        assert "'openai'" in caplog.text


class TestAnalysisThreading:
    async def test_code_analysis_runs_off_the_event_loop_thread(self) -> None:
        loop_thread = threading.get_ident()
        seen: list[int] = []

        def _analyze(code, filename=None):
            seen.append(threading.get_ident())
            return analyze_code(code, filename)

        body = AnalyzeRequest(codeSource="input", code=IMG_CODE)
        with patch("app.analyze.service.analyze_code", side_effect=_analyze):
            outcome = await run_analysis(body)

        assert len(seen) == 1
        assert seen[0] != loop_thread
        assert outcome.analysis.summary.total_issues == 1

    async def test_bundle_analysis_runs_off_the_event_loop_thread(self) -> None:
        loop_thread = threading.get_ident()
        seen: list[int] = []

        def _analyze(content, files=None):
            seen.append(threading.get_ident())
            return analyze_bundle(content, files=files)

        body = AnalyzeRequest(
            codeSource="input",
            code=IMG_CODE,
            packageJson='{"dependencies": {"moment": "^2.29.0"}}',
        )
        with patch("app.analyze.service.analyze_bundle", side_effect=_analyze):
            outcome = await run_analysis(body)

        assert len(seen) == 1
        assert seen[0] != loop_thread
        assert outcome.bundle is not None
