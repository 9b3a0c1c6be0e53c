"""Code analyzer for Next.js source files.

Public API:
    analyze_code(code, filename=None) -> AnalysisResult
    analyze_files(files) -> MultiFileResult
"""

from perfpilot.analyzer.aggregator import analyze_files
from perfpilot.analyzer.code_analyzer import analyze_code
from perfpilot.analyzer.types import (
    AnalysisResult,
    FileFinding,
    Finding,
    MultiFileResult,
    Summary,
)

__all__ = [
    "analyze_code",
    "analyze_files",
    "AnalysisResult",
    "FileFinding",
    "Finding",
    "MultiFileResult",
    "Summary",
]
