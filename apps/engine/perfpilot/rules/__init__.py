"""Rule catalog for Next.js performance anti-patterns.

Public API:
    PERFORMANCE_RULES, get_rule(rule_id)
    Rule, TextPattern, Predicate, Severity, Category
"""

from perfpilot.rules.catalog import PERFORMANCE_RULES, get_rule
from perfpilot.rules.types import Category, Predicate, Rule, Severity, TextPattern

__all__ = [
    "PERFORMANCE_RULES",
    "get_rule",
    "Rule",
    "TextPattern",
    "Predicate",
    "Severity",
    "Category",
]
