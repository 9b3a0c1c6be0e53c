"""Bundle/dependency analysis for package.json manifests.

Public API:
    analyze_bundle(manifest_text, files=None) -> BundleAnalysisResult
    scan_imports(files) -> list[TreeshakingIssue]
    parse_manifest(text) -> dict
"""

from perfpilot.bundle.analyzer import analyze_bundle
from perfpilot.bundle.manifest import ManifestParseError, parse_manifest
from perfpilot.bundle.treeshaking import scan_imports
from perfpilot.bundle.types import (
    BundleAnalysisResult,
    DuplicateDependency,
    HeavyDependency,
    TreeshakingIssue,
    UnnecessaryDependency,
)

__all__ = [
    "analyze_bundle",
    "scan_imports",
    "parse_manifest",
    "ManifestParseError",
    "BundleAnalysisResult",
    "DuplicateDependency",
    "HeavyDependency",
    "TreeshakingIssue",
    "UnnecessaryDependency",
]
