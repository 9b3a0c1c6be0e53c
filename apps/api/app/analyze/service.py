"""Analysis orchestration for the analyze endpoints.

Pipeline for one request:
  1. Validate the input source and collect (filename, text) pairs
  2. Rule-based code analysis (single file or multi-file aggregate)
  3. Bundle analysis when a package.json is supplied
  4. Recommendation generation (LLM, or rule-based fallback)
  5. Overall performance score and label

`iter_analysis` yields a progress event before each stage so the SSE
endpoint can forward them; `run_analysis` drains it for the plain JSON
endpoint. Both produce the same `AnalysisOutcome`.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Optional, Union

from perfpilot.analyzer import AnalysisResult, MultiFileResult, analyze_code, analyze_files
from perfpilot.bundle import BundleAnalysisResult, analyze_bundle
from perfpilot.llm import LLMConfig, is_known_model
from perfpilot.recommendations import Recommendations, generate_recommendations
from perfpilot.scoring import calculate_performance_score, combine_scores, score_label

from app.analyze.schemas import CODE_SOURCES, AnalyzeRequest
from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_INPUT_FILENAME = "input.tsx"

PROGRESS_PROCESSING = "Processing files"
PROGRESS_CODE = "Analyzing code"
PROGRESS_BUNDLE = "Analyzing bundle"
PROGRESS_RECOMMENDATIONS = "Generating recommendations"
PROGRESS_FINALIZING = "Finalizing results"


class AnalyzeInputError(ValueError):
    """The request does not carry analysable input. Maps to HTTP 400."""


@dataclass
class AnalysisOutcome:
    analysis: Union[AnalysisResult, MultiFileResult]
    recommendations: Recommendations
    bundle: Optional[BundleAnalysisResult]
    performance_score: int

    def results_payload(self) -> dict:
        """The `results` object stored with a history record."""
        payload = {
            "analysis": self.analysis.to_dict(),
            "recommendations": self.recommendations.to_dict(),
        }
        if self.bundle is not None:
            payload["bundleAnalysis"] = self.bundle.to_dict()
        return payload

    def to_dict(self) -> dict:
        data = self.results_payload()
        data["performanceScore"] = self.performance_score
        data["scoreLabel"] = score_label(self.performance_score)
        return data


@dataclass
class AnalysisEvent:
    """One step of an analysis: a progress message or the final outcome."""

    type: str  # "progress" | "complete"
    message: str = ""
    outcome: Optional[AnalysisOutcome] = None


def llm_config_from_settings(settings: Settings) -> Optional[LLMConfig]:
    """Build the LLM config for recommendations, or None when no key is set."""
    api_key = settings.llm_api_key()
    if not api_key:
        return None
    if not is_known_model(settings.llm_provider, settings.llm_model):
        logger.warning(
            "Model %r is not in the known list for provider %r; using it anyway",
            settings.llm_model, settings.llm_provider,
        )
    return LLMConfig(
        provider=settings.llm_provider,
        model=settings.llm_model,
        api_key=api_key,
    )


def collect_sources(body: AnalyzeRequest) -> list[tuple[str, str]]:
    """Return the (filename, text) pairs to analyse.

    Raises:
        AnalyzeInputError: unknown source, no code, or no files.
    """
    if body.code_source not in CODE_SOURCES:
        raise AnalyzeInputError("Invalid code source")

    if body.code_source == "upload":
        if not body.files:
            raise AnalyzeInputError("No files provided")
        return [(f.name, f.content) for f in body.files]

    if not body.code:
        raise AnalyzeInputError("No code provided")
    return [(body.filename or DEFAULT_INPUT_FILENAME, body.code)]


async def iter_analysis(
    body: AnalyzeRequest,
    llm_config: Optional[LLMConfig] = None,
) -> AsyncIterator[AnalysisEvent]:
    """Run the analysis pipeline, yielding progress before each stage.

    Input is validated before the first event, so `AnalyzeInputError`
    surfaces on the first iteration. The rule and bundle passes are
    CPU-bound and run in a worker thread to keep the event loop free.
    """
    sources = collect_sources(body)
    yield AnalysisEvent(type="progress", message=PROGRESS_PROCESSING)
    multi_file = body.code_source == "upload"

    yield AnalysisEvent(type="progress", message=PROGRESS_CODE)
    if multi_file:
        analysis: Union[AnalysisResult, MultiFileResult] = await asyncio.to_thread(
            analyze_files, sources
        )
        code_summary = analysis.aggregate_summary
    else:
        filename, code = sources[0]
        analysis = await asyncio.to_thread(analyze_code, code, filename)
        code_summary = analysis.summary

    bundle: Optional[BundleAnalysisResult] = None
    if body.package_json:
        yield AnalysisEvent(type="progress", message=PROGRESS_BUNDLE)
        bundle = await asyncio.to_thread(analyze_bundle, body.package_json, files=sources)

    yield AnalysisEvent(type="progress", message=PROGRESS_RECOMMENDATIONS)
    if multi_file:
        recommendations = await generate_recommendations(analysis, config=llm_config)
    else:
        filename, code = sources[0]
        recommendations = await generate_recommendations(
            analysis, code, filename, config=llm_config
        )

    yield AnalysisEvent(type="progress", message=PROGRESS_FINALIZING)
    score = combine_scores(
        calculate_performance_score(code_summary),
        bundle.score if bundle is not None else None,
    )
    logger.info(
        "Analysis finished: %d file(s), %d issue(s), score %d (recommendations: %s)",
        len(sources), code_summary.total_issues, score, recommendations.source,
    )

    yield AnalysisEvent(
        type="complete",
        outcome=AnalysisOutcome(
            analysis=analysis,
            recommendations=recommendations,
            bundle=bundle,
            performance_score=score,
        ),
    )


async def run_analysis(
    body: AnalyzeRequest,
    llm_config: Optional[LLMConfig] = None,
) -> AnalysisOutcome:
    """Run the full pipeline and return the final outcome."""
    outcome: Optional[AnalysisOutcome] = None
    async for event in iter_analysis(body, llm_config):
        if event.type == "complete":
            outcome = event.outcome
    if outcome is None:
        raise RuntimeError("Analysis pipeline ended without a result")
    return outcome
