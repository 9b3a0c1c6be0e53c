"""Multi-file analysis.

Runs the code analyzer on each file independently and sums the per-file
summaries into one aggregate. Files are analyzed in input order.
"""

import logging

from perfpilot.analyzer.code_analyzer import analyze_code
from perfpilot.analyzer.types import MultiFileResult, Summary
from perfpilot.sources import FileInput, iter_files

logger = logging.getLogger(__name__)


def analyze_files(files: FileInput) -> MultiFileResult:
    """Analyze every file and build the aggregate summary.

    Duplicate filenames: the last occurrence wins in file_results.
    The aggregate is computed from the final file_results, so it always
    equals the sum of the per-file summaries that are reported.
    """
    file_results = {}
    for filename, code in iter_files(files):
        file_results[filename] = analyze_code(code, filename=filename)

    aggregate = Summary()
    for result in file_results.values():
        aggregate.merge(result.summary)

    logger.info(
        "Analyzed %d files: %d issues (%d critical)",
        len(file_results), aggregate.total_issues, aggregate.critical_issues,
    )
    return MultiFileResult(file_results=file_results, aggregate_summary=aggregate)
