"""Prompt builders for recommendation generation.

The model is asked for prose with a "Summary:" section followed by a
numbered "Recommendations:" list; the generator relies on those two
markers when splitting the reply.
"""

from typing import Optional

from perfpilot.analyzer.types import Finding, MultiFileResult, Summary

CODE_SNIPPET_LIMIT = 2000

SYSTEM_PROMPT = (
    "You are PerfPilot AI, an expert in Next.js performance optimization. "
    "Answer with a section starting with 'Summary:' followed by a section "
    "starting with 'Recommendations:' containing a numbered list."
)


def _summary_block(summary: Summary) -> str:
    return (
        "Summary:\n"
        f"- Total issues: {summary.total_issues}\n"
        f"- Critical issues: {summary.critical_issues}\n"
        f"- Warning issues: {summary.warning_issues}\n"
        f"- Info issues: {summary.info_issues}"
    )


def _issue_line(finding: Finding, filename: Optional[str] = None) -> str:
    line = f"- {finding.rule.name}"
    if filename:
        line += f" (in {filename})"
    line += f": {finding.rule.description}"
    if finding.line_number is not None:
        line += f" (Line {finding.line_number})"
    return line


def single_file_prompt(
    issues: list[Finding],
    summary: Summary,
    code: str,
    filename: Optional[str] = None,
) -> str:
    snippet = code[:CODE_SNIPPET_LIMIT]
    if len(code) > CODE_SNIPPET_LIMIT:
        snippet += "..."

    issue_lines = "\n".join(_issue_line(f) for f in issues)

    return f"""Analyze the following code and provide recommendations based on the detected issues.

Code filename: {filename or 'Unknown'}

Code snippet:
```
{snippet}
```

Detected issues:
{issue_lines}

{_summary_block(summary)}

Provide a concise summary of the performance issues and 3-5 specific, actionable recommendations to improve the code's performance. For each recommendation, explain why it's important for Next.js performance and how it will improve the user experience.
"""


def multi_file_prompt(result: MultiFileResult) -> str:
    file_names = ", ".join(result.file_results.keys())
    issue_lines = "\n".join(
        _issue_line(item.finding, item.filename) for item in result.all_issues()
    )

    return f"""Analyze the following code files and provide recommendations based on the detected issues.

Files analyzed: {file_names}

Detected issues across all files:
{issue_lines}

{_summary_block(result.aggregate_summary)}

Provide a comprehensive summary of the performance issues found across ALL files. Then provide 3-5 specific, actionable recommendations to improve the overall application's performance. For each recommendation, explain why it's important for Next.js performance and how it will improve the user experience.

IMPORTANT: Your summary should address issues across all files, not just focus on a single file.
"""
