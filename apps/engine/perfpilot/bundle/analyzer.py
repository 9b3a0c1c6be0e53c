"""Bundle/dependency analyzer for package.json manifests.

Classifies runtime dependencies against the static knowledge tables,
scores the result and produces a rough size estimate. Only the
"dependencies" block is classified; "devDependencies" are counted for the
size breakdown but never flagged.

Malformed manifests never raise: the analyzer returns a degraded result
with a perfect score and empty issue lists.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Optional

from perfpilot.bundle.manifest import ManifestParseError, parse_manifest
from perfpilot.bundle.tables import (
    DEFAULT_PACKAGE_SIZE_KB,
    DUPLICATE_GROUPS,
    HEAVY_DEPENDENCIES,
    UNNECESSARY_DEPENDENCIES,
)
from perfpilot.bundle.treeshaking import scan_imports
from perfpilot.bundle.types import (
    BundleAnalysisResult,
    BundleSize,
    DuplicateDependency,
    HeavyDependency,
    UnnecessaryDependency,
)
from perfpilot.scoring import calculate_bundle_score
from perfpilot.sources import FileInput

logger = logging.getLogger(__name__)

PARSE_ERROR_ESTIMATE = "Error: Invalid package.json format"
ANALYSIS_ERROR_ESTIMATE = "Error during analysis"

_SIZE_KB = re.compile(r"~?(\d+)KB")


def analyze_bundle(
    manifest_text: str,
    files: Optional[FileInput] = None,
) -> BundleAnalysisResult:
    """Analyze a package.json text blob.

    When files are given, their imports are scanned for tree-shaking issues.
    Tree-shaking issues are reported but do not affect the score or the
    issue total.
    """
    logger.info("Starting bundle analysis (%d chars)", len(manifest_text))

    try:
        manifest = parse_manifest(manifest_text)
    except ManifestParseError as exc:
        logger.warning("Failed to parse package.json: %s", exc)
        return _degraded_result(PARSE_ERROR_ESTIMATE, "Parse error", "Parse error")

    try:
        result = _analyze_manifest(manifest)
        if files is not None:
            result.treeshaking_issues = scan_imports(files)
    except Exception:
        logger.exception("Error analyzing bundle size")
        return _degraded_result(ANALYSIS_ERROR_ESTIMATE, "Unknown", "Unknown")

    logger.info(
        "Bundle analysis complete: %d heavy, %d unnecessary, %d duplicate, score %d",
        len(result.heavy_dependencies),
        len(result.unnecessary_dependencies),
        len(result.duplicate_dependencies),
        result.score,
    )
    return result


def _analyze_manifest(manifest: dict[str, Any]) -> BundleAnalysisResult:
    dependencies = _dependency_map(manifest.get("dependencies"))
    dev_dependencies = _dependency_map(manifest.get("devDependencies"))

    heavy = find_heavy_dependencies(dependencies)
    unnecessary = find_unnecessary_dependencies(dependencies)
    duplicates = find_duplicate_functionality(dependencies)

    return BundleAnalysisResult(
        total_dependencies=len(dependencies),
        heavy_dependencies=heavy,
        unnecessary_dependencies=unnecessary,
        duplicate_dependencies=duplicates,
        score=calculate_bundle_score(len(heavy), len(unnecessary), len(duplicates)),
        size=BundleSize(
            estimated=estimate_bundle_size(dependencies),
            dependencies=f"{len(dependencies)} dependencies",
            dev_dependencies=f"{len(dev_dependencies)} devDependencies",
        ),
    )


def _dependency_map(value: Any) -> Mapping[str, Any]:
    # Versions are ignored; anything that isn't an object counts as empty.
    if isinstance(value, Mapping):
        return value
    return {}


def find_heavy_dependencies(dependencies: Mapping[str, Any]) -> list[HeavyDependency]:
    heavy = []
    for name in dependencies:
        info = HEAVY_DEPENDENCIES.get(name)
        if info is None:
            continue
        heavy.append(
            HeavyDependency(
                name=name,
                estimated_size=info.size,
                alternatives=list(info.alternatives) if info.alternatives else None,
            )
        )
    return heavy


def find_unnecessary_dependencies(dependencies: Mapping[str, Any]) -> list[UnnecessaryDependency]:
    return [
        UnnecessaryDependency(name=name, reason=UNNECESSARY_DEPENDENCIES[name])
        for name in dependencies
        if name in UNNECESSARY_DEPENDENCIES
    ]


def find_duplicate_functionality(dependencies: Mapping[str, Any]) -> list[DuplicateDependency]:
    """One DuplicateDependency per group with two or more installed members.

    Names are reported in group definition order.
    """
    duplicates = []
    for group in DUPLICATE_GROUPS:
        present = [member for member in group.members if member in dependencies]
        if len(present) > 1:
            duplicates.append(DuplicateDependency(names=present, reason=group.reason))
    return duplicates


def estimate_bundle_size(dependencies: Mapping[str, Any]) -> str:
    """Very rough size estimate: known sizes for heavy packages, a flat default otherwise."""
    total_kb = 0
    for name in dependencies:
        info = HEAVY_DEPENDENCIES.get(name)
        if info is None:
            total_kb += DEFAULT_PACKAGE_SIZE_KB
            continue
        match = _SIZE_KB.search(info.size)
        if match:
            total_kb += int(match.group(1))

    if total_kb > 1000:
        return f"~{total_kb / 1000:.1f}MB"
    return f"~{total_kb}KB"


def _degraded_result(estimated: str, deps_label: str, dev_deps_label: str) -> BundleAnalysisResult:
    return BundleAnalysisResult(
        total_dependencies=0,
        score=100,
        size=BundleSize(
            estimated=estimated,
            dependencies=deps_label,
            dev_dependencies=dev_deps_label,
        ),
    )
