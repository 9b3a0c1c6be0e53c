"""Types for the bundle/dependency analyzer."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class HeavyDependency:
    name: str
    estimated_size: str
    alternatives: Optional[list[str]] = None

    def to_dict(self) -> dict:
        data: dict = {"name": self.name, "estimatedSize": self.estimated_size}
        if self.alternatives is not None:
            data["alternatives"] = list(self.alternatives)
        return data


@dataclass
class UnnecessaryDependency:
    name: str
    reason: str

    def to_dict(self) -> dict:
        return {"name": self.name, "reason": self.reason}


@dataclass
class DuplicateDependency:
    """Two or more installed packages from the same functionality group."""

    names: list[str]
    reason: str

    def to_dict(self) -> dict:
        return {"names": list(self.names), "reason": self.reason}


@dataclass
class TreeshakingIssue:
    dependency: str
    import_statement: str
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "dependency": self.dependency,
            "importStatement": self.import_statement,
            "recommendation": self.recommendation,
        }


@dataclass
class BundleSize:
    estimated: str
    dependencies: str
    dev_dependencies: str

    def to_dict(self) -> dict:
        return {
            "estimated": self.estimated,
            "breakdown": {
                "dependencies": self.dependencies,
                "devDependencies": self.dev_dependencies,
            },
        }


@dataclass
class BundleAnalysisResult:
    """Complete bundle analysis for one manifest.

    total_issues counts heavy + unnecessary + duplicate entries only;
    tree-shaking issues are reported but not counted or scored.
    """

    total_dependencies: int
    size: BundleSize
    heavy_dependencies: list[HeavyDependency] = field(default_factory=list)
    unnecessary_dependencies: list[UnnecessaryDependency] = field(default_factory=list)
    duplicate_dependencies: list[DuplicateDependency] = field(default_factory=list)
    treeshaking_issues: list[TreeshakingIssue] = field(default_factory=list)
    score: int = 100

    @property
    def total_issues(self) -> int:
        return (
            len(self.heavy_dependencies)
            + len(self.unnecessary_dependencies)
            + len(self.duplicate_dependencies)
        )

    def to_dict(self) -> dict:
        return {
            "totalDependencies": self.total_dependencies,
            "heavyDependencies": [d.to_dict() for d in self.heavy_dependencies],
            "unnecessaryDependencies": [d.to_dict() for d in self.unnecessary_dependencies],
            "duplicateDependencies": [d.to_dict() for d in self.duplicate_dependencies],
            "treeshakingIssues": [t.to_dict() for t in self.treeshaking_issues],
            "score": self.score,
            "summary": {
                "totalIssues": self.total_issues,
                "size": self.size.to_dict(),
            },
        }
