"""Tests for score calculation and labels."""

import pytest

from perfpilot.analyzer import Summary
from perfpilot.scoring import (
    calculate_bundle_score,
    calculate_performance_score,
    combine_scores,
    score_label,
)


class TestBundleScore:
    def test_no_issues_is_perfect(self):
        assert calculate_bundle_score(0, 0, 0) == 100

    def test_weighted_penalties(self):
        # 100 - 2*5 - 1*3 - 1*8
        assert calculate_bundle_score(2, 1, 1) == 79

    def test_clamped_at_zero(self):
        assert calculate_bundle_score(30, 0, 0) == 0


class TestPerformanceScore:
    def test_weighted_by_severity(self):
        summary = Summary(total_issues=10, critical_issues=3, warning_issues=2, info_issues=5)
        # 100 - 30 - 10 - 10
        assert calculate_performance_score(summary) == 50

    def test_clamped_at_zero(self):
        summary = Summary(total_issues=20, critical_issues=20)
        assert calculate_performance_score(summary) == 0

    def test_empty_summary(self):
        assert calculate_performance_score(Summary()) == 100


class TestCombineScores:
    def test_mean_of_present_scores(self):
        assert combine_scores(80, 90) == 85

    def test_half_rounds_up(self):
        assert combine_scores(90, 95) == 93

    def test_missing_scores_ignored(self):
        assert combine_scores(72, None) == 72

    def test_no_scores(self):
        assert combine_scores() == 100
        assert combine_scores(None, None) == 100


class TestScoreLabel:
    @pytest.mark.parametrize(
        "score,label",
        [
            (100, "Excellent"),
            (90, "Excellent"),
            (89, "Good"),
            (75, "Good"),
            (74, "Moderate"),
            (60, "Moderate"),
            (59, "Needs Improvement"),
            (40, "Needs Improvement"),
            (39, "Poor"),
            (0, "Poor"),
        ],
    )
    def test_thresholds(self, score, label):
        assert score_label(score) == label
