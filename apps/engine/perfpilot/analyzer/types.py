"""Types for the code analyzer.

A Finding is one rule match recorded against one file. An AnalysisResult
holds the findings for a single file in rule-catalog order, plus a Summary
that partitions them by severity and by category.

All to_dict() methods render the camelCase JSON shape consumed by the UI.
"""

from dataclasses import dataclass, field
from typing import Optional

from perfpilot.rules.types import Rule, Severity


@dataclass
class Summary:
    """Issue counts for one file or an aggregate of files.

    categories only ever contains keys observed in the counted issues.
    """

    total_issues: int = 0
    critical_issues: int = 0
    warning_issues: int = 0
    info_issues: int = 0
    categories: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_findings(cls, findings: list["Finding"]) -> "Summary":
        summary = cls(total_issues=len(findings))
        for finding in findings:
            severity = finding.rule.severity
            if severity == Severity.CRITICAL:
                summary.critical_issues += 1
            elif severity == Severity.WARNING:
                summary.warning_issues += 1
            else:
                summary.info_issues += 1

            category = finding.rule.category.value
            summary.categories[category] = summary.categories.get(category, 0) + 1
        return summary

    def merge(self, other: "Summary") -> None:
        """Add another summary's counts into this one, field by field."""
        self.total_issues += other.total_issues
        self.critical_issues += other.critical_issues
        self.warning_issues += other.warning_issues
        self.info_issues += other.info_issues
        for category, count in other.categories.items():
            self.categories[category] = self.categories.get(category, 0) + count

    def to_dict(self) -> dict:
        return {
            "totalIssues": self.total_issues,
            "criticalIssues": self.critical_issues,
            "warningIssues": self.warning_issues,
            "infoIssues": self.info_issues,
            "categories": dict(self.categories),
        }


@dataclass
class Finding:
    """A single rule match.

    line_number and code are only set for text-pattern rules whose pattern
    also matches a single line on its own.
    """

    rule: Rule
    line_number: Optional[int] = None
    code: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"rule": self.rule.to_dict()}
        if self.line_number is not None:
            data["lineNumber"] = self.line_number
        if self.code is not None:
            data["code"] = self.code
        return data


@dataclass
class AnalysisResult:
    issues: list[Finding] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)

    def to_dict(self) -> dict:
        return {
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary.to_dict(),
        }


@dataclass
class FileFinding:
    """A Finding tagged with the file it was found in."""

    filename: str
    finding: Finding


@dataclass
class MultiFileResult:
    """Per-file results plus an element-wise sum of their summaries.

    file_results preserves input order; duplicate filenames keep the
    position of their first occurrence and the result of their last.
    """

    file_results: dict[str, AnalysisResult] = field(default_factory=dict)
    aggregate_summary: Summary = field(default_factory=Summary)

    def all_issues(self) -> list[FileFinding]:
        return [
            FileFinding(filename=name, finding=finding)
            for name, result in self.file_results.items()
            for finding in result.issues
        ]

    def to_dict(self) -> dict:
        return {
            "fileResults": {
                name: result.to_dict() for name, result in self.file_results.items()
            },
            "aggregateSummary": self.aggregate_summary.to_dict(),
        }
