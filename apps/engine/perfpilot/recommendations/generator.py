"""Natural-language recommendation generation.

Sends the detected issues to an LLM and splits its prose reply into a
summary and a list of recommendations. The reply is treated as display
text only; parsing is a light heuristic over the "Summary:" and
"Recommendations:" markers.

When no API key is configured or the provider fails, a deterministic
summary is built from the rule catalog's own remediation text instead.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from perfpilot.analyzer.types import AnalysisResult, Finding, MultiFileResult, Summary
from perfpilot.llm.registry import provider_for
from perfpilot.llm.provider import LLMProvider, LLMProviderError
from perfpilot.llm.types import LLMConfig, LLMMessage
from perfpilot.recommendations.prompts import (
    SYSTEM_PROMPT,
    multi_file_prompt,
    single_file_prompt,
)
from perfpilot.rules.types import Severity

logger = logging.getLogger(__name__)

NO_ISSUES_SUMMARY = "No performance issues were detected in your code. Great job!"
MAX_FALLBACK_RECOMMENDATIONS = 5

_SUMMARY_SECTION = re.compile(r"Summary:(.*?)(?=Recommendations:|$)", re.DOTALL)
_RECOMMENDATIONS_SECTION = re.compile(r"Recommendations:(.*)", re.DOTALL)
_NUMBERED_ITEM = re.compile(r"\d+\.")

_SEVERITY_ORDER = {Severity.CRITICAL: 0, Severity.WARNING: 1, Severity.INFO: 2}


@dataclass
class Recommendations:
    """Prose recommendations for display.

    source: "llm", "fallback" or "none" (no issues, nothing generated).
    """

    summary: str
    recommendations: list[str] = field(default_factory=list)
    source: str = "llm"

    def to_dict(self) -> dict:
        return {"summary": self.summary, "recommendations": list(self.recommendations)}


async def generate_recommendations(
    analysis: Union[AnalysisResult, MultiFileResult],
    code: str = "",
    filename: Optional[str] = None,
    *,
    config: Optional[LLMConfig] = None,
    provider: Optional[LLMProvider] = None,
) -> Recommendations:
    """Produce recommendations for a single- or multi-file analysis.

    Never raises for provider failures: they are logged and the rule-based
    fallback is returned.
    """
    issues, summary = _issues_and_summary(analysis)

    if not issues:
        return Recommendations(summary=NO_ISSUES_SUMMARY, recommendations=[], source="none")

    if config is None or not config.api_key:
        logger.info("No LLM API key configured; using rule-based recommendations")
        return fallback_recommendations(issues, summary)

    if isinstance(analysis, MultiFileResult):
        prompt = multi_file_prompt(analysis)
    else:
        prompt = single_file_prompt(issues, summary, code, filename)

    messages = [
        LLMMessage(role="system", content=SYSTEM_PROMPT),
        LLMMessage(role="user", content=prompt),
    ]

    try:
        llm = provider or provider_for(config)
        response = await llm.complete(messages, config)
    except LLMProviderError as exc:
        logger.warning("Recommendation generation failed: %s", exc)
        return fallback_recommendations(issues, summary)

    logger.info(
        "Generated recommendations with %s/%s (%d tokens)",
        response.provider, response.model, response.usage.total_tokens,
    )
    return parse_recommendations(response.content)


def parse_recommendations(text: str) -> Recommendations:
    """Split an LLM reply into summary and numbered recommendations.

    Without a "Summary:" marker the whole text is the summary. Without a
    "Recommendations:" marker the list is empty.
    """
    summary_match = _SUMMARY_SECTION.search(text)
    summary = summary_match.group(1).strip() if summary_match else text

    recommendations: list[str] = []
    recs_match = _RECOMMENDATIONS_SECTION.search(text)
    if recs_match:
        for chunk in _NUMBERED_ITEM.split(recs_match.group(1).strip()):
            item = chunk.strip()
            if item:
                recommendations.append(item)

    return Recommendations(summary=summary, recommendations=recommendations, source="llm")


def fallback_recommendations(issues: list[Finding], summary: Summary) -> Recommendations:
    """Rule-based recommendations: one per distinct rule, most severe first."""
    ordered = sorted(issues, key=lambda f: _SEVERITY_ORDER[f.rule.severity])

    seen: set[str] = set()
    recommendations: list[str] = []
    for finding in ordered:
        if finding.rule.id in seen:
            continue
        seen.add(finding.rule.id)
        recommendations.append(f"{finding.rule.name}: {finding.rule.recommendation}")
        if len(recommendations) >= MAX_FALLBACK_RECOMMENDATIONS:
            break

    text = (
        f"Found {summary.total_issues} performance issue"
        f"{'' if summary.total_issues == 1 else 's'} "
        f"({summary.critical_issues} critical, {summary.warning_issues} warning, "
        f"{summary.info_issues} info)."
    )
    return Recommendations(summary=text, recommendations=recommendations, source="fallback")


def _issues_and_summary(
    analysis: Union[AnalysisResult, MultiFileResult],
) -> tuple[list[Finding], Summary]:
    if isinstance(analysis, MultiFileResult):
        return [item.finding for item in analysis.all_issues()], analysis.aggregate_summary
    return analysis.issues, analysis.summary
