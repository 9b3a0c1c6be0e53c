"""Single-file code analyzer.

Applies every rule in the catalog to one source text. Each rule contributes
at most one Finding, and findings are appended in catalog order.

Text-pattern findings are localized by re-testing the rule's regex against
each line on its own and taking the first line that matches. This can
differ from the full-text match (multi-line patterns localize to nothing).
"""

import logging
from typing import Iterable, Optional

from perfpilot.analyzer.types import AnalysisResult, Finding, Summary
from perfpilot.rules.catalog import PERFORMANCE_RULES
from perfpilot.rules.types import Rule, TextPattern

logger = logging.getLogger(__name__)


def analyze_code(
    code: str,
    filename: Optional[str] = None,
    rules: Iterable[Rule] = PERFORMANCE_RULES,
) -> AnalysisResult:
    """Analyze one source text against the rule catalog.

    filename is used for log context only. Never raises for string input:
    a rule that fails to evaluate is treated as not matching.
    """
    issues: list[Finding] = []

    for rule in rules:
        finding = _evaluate_rule(rule, code, filename)
        if finding is not None:
            issues.append(finding)

    logger.debug(
        "Analyzed %s: %d issues", filename or "<input>", len(issues),
    )
    return AnalysisResult(issues=issues, summary=Summary.from_findings(issues))


def _evaluate_rule(rule: Rule, code: str, filename: Optional[str]) -> Optional[Finding]:
    try:
        if not rule.pattern.matches(code):
            return None
        if isinstance(rule.pattern, TextPattern):
            line_number, matched_code = rule.pattern.first_matching_line(code)
            return Finding(rule=rule, line_number=line_number, code=matched_code)
        return Finding(rule=rule)
    except Exception:
        logger.warning(
            "Rule %s failed on %s; treating as no match",
            rule.id, filename or "<input>", exc_info=True,
        )
        return None
