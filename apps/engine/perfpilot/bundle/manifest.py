"""Tolerant package.json parsing.

Manifests pasted by users are often JSONC-ish: comments, trailing commas,
bare keys, single quotes. Parsing is staged:

1. Strict JSON.
2. Syntactic repair, then JSON. Repairs only rewrite tokens; the input is
   never evaluated as code.
3. Piecemeal extraction of the "dependencies" / "devDependencies" blocks.

Each stage only accepts a JSON object. When every stage fails,
ManifestParseError is raised.
"""

import json
import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ManifestParseError(ValueError):
    """Raised when a manifest cannot be read by any parsing stage."""


# Double- or single-quoted string literal, with backslash escapes.
_STRING_TOKEN = re.compile(r""""(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*'""", re.DOTALL)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z0-9_$]+)(\s*:)")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_CONTROL_CHARS_OUTSIDE_STRINGS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_ESCAPE_SEQUENCE = re.compile(r"\\(.)", re.DOTALL)
_VALID_ESCAPES = frozenset("\"\\/bfnrtu")

_SECTION_PATTERNS = {
    "dependencies": re.compile(r'"dependencies"\s*:\s*(\{[^}]*\})'),
    "devDependencies": re.compile(r'"devDependencies"\s*:\s*(\{[^}]*\})'),
}


def parse_manifest(content: str) -> dict[str, Any]:
    """Parse manifest text into a dict using the staged strategy above."""
    data = _loads_object(content)
    if data is not None:
        return data
    logger.debug("Strict JSON parse failed, trying repair")

    data = _loads_object(repair_json(content))
    if data is not None:
        return data
    logger.debug("Repaired JSON parse failed, trying section extraction")

    data = _extract_sections(content)
    if data:
        return data

    raise ManifestParseError("Could not parse package.json using any available method")


def repair_json(content: str) -> str:
    """Rewrite common JSONC/JS-object-literal artifacts into strict JSON.

    Comments are removed first so quotes inside comments cannot confuse
    string detection. The remaining repairs are applied outside string
    literals only, except quote and escape normalization which is applied
    to the literals themselves.
    """
    text = strip_comments(content)

    parts: list[str] = []
    cursor = 0
    for match in _STRING_TOKEN.finditer(text):
        parts.append(_repair_structure(text[cursor:match.start()]))
        parts.append(_normalize_string(match.group(0)))
        cursor = match.end()
    parts.append(_repair_structure(text[cursor:]))

    return "".join(parts)


def strip_comments(content: str) -> str:
    """Remove // line comments and /* */ block comments outside string literals."""
    out: list[str] = []
    i = 0
    n = len(content)
    quote: Optional[str] = None

    while i < n:
        ch = content[i]

        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(content[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if ch in ('"', "'"):
            quote = ch
            out.append(ch)
            i += 1
        elif content.startswith("//", i):
            newline = content.find("\n", i)
            i = n if newline == -1 else newline
        elif content.startswith("/*", i):
            end = content.find("*/", i + 2)
            i = n if end == -1 else end + 2
            out.append(" ")
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def _repair_structure(chunk: str) -> str:
    chunk = _CONTROL_CHARS_OUTSIDE_STRINGS.sub("", chunk)
    chunk = _TRAILING_COMMA.sub(r"\1", chunk)
    return _BARE_KEY.sub(r'\1"\2"\3', chunk)


def _normalize_string(token: str) -> str:
    """Return the literal as a valid double-quoted JSON string."""
    body = token[1:-1]
    if token[0] == "'":
        body = body.replace("\\'", "'")
        body = re.sub(r'(?<!\\)"', r'\\"', body)
    body = _CONTROL_CHARS.sub("", body)
    body = _ESCAPE_SEQUENCE.sub(_fix_escape, body)
    return f'"{body}"'


def _fix_escape(match: re.Match) -> str:
    # Unknown escapes (e.g. Windows paths) become a literal backslash.
    if match.group(1) in _VALID_ESCAPES:
        return match.group(0)
    return "\\\\" + match.group(1)


def _extract_sections(content: str) -> dict[str, Any]:
    """Last resort: pull the dependency blocks out with a regex and parse each alone."""
    result: dict[str, Any] = {}
    for key, pattern in _SECTION_PATTERNS.items():
        match = pattern.search(content)
        if not match:
            continue
        block = _loads_object(repair_json(match.group(1)))
        if block is None:
            logger.debug("Failed to parse %s section", key)
            continue
        result[key] = block
    return result


def _loads_object(text: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    return data
