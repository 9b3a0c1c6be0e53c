"""Score calculation shared by the code and bundle analyzers.

All scores are integers clamped to [0, 100]. Penalty weights are fixed so
results are reproducible across runs.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from perfpilot.analyzer.types import Summary

# Bundle penalties per issue
HEAVY_DEPENDENCY_PENALTY = 5
UNNECESSARY_DEPENDENCY_PENALTY = 3
DUPLICATE_GROUP_PENALTY = 8

# Code penalties per finding, by severity
CRITICAL_PENALTY = 10
WARNING_PENALTY = 5
INFO_PENALTY = 2

# (minimum score, label), checked top-down
SCORE_LABELS: list[tuple[int, str]] = [
    (90, "Excellent"),
    (75, "Good"),
    (60, "Moderate"),
    (40, "Needs Improvement"),
]
LOWEST_LABEL = "Poor"


def clamp_score(score: float) -> int:
    return int(max(0, min(100, score)))


def calculate_bundle_score(heavy: int, unnecessary: int, duplicate_groups: int) -> int:
    """100 minus weighted penalties for each bundle issue kind."""
    return clamp_score(
        100
        - heavy * HEAVY_DEPENDENCY_PENALTY
        - unnecessary * UNNECESSARY_DEPENDENCY_PENALTY
        - duplicate_groups * DUPLICATE_GROUP_PENALTY
    )


def calculate_performance_score(summary: Summary) -> int:
    """100 minus weighted penalties for each code finding severity."""
    return clamp_score(
        100
        - summary.critical_issues * CRITICAL_PENALTY
        - summary.warning_issues * WARNING_PENALTY
        - summary.info_issues * INFO_PENALTY
    )


def combine_scores(*scores: Optional[int]) -> int:
    """Mean of the scores that are present, rounded half up. 100 when none are."""
    present = [s for s in scores if s is not None]
    if not present:
        return 100
    return clamp_score(math.floor(sum(present) / len(present) + 0.5))


def score_label(score: int) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return LOWEST_LABEL
