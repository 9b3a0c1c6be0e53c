"""Types for the rule catalog.

A Rule binds a detection pattern to severity, category and remediation
metadata. Patterns come in two variants:

- TextPattern: a compiled regex searched against the source text. Matches
  can be localized to a line.
- Predicate: an opaque function over the whole source text. Predicate
  matches carry no line number or snippet.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Category(str, Enum):
    IMAGES = "images"
    RENDERING = "rendering"
    IMPORTS = "imports"
    FONTS = "fonts"
    SCRIPTS = "scripts"
    GENERAL = "general"
    COMPONENTS = "components"
    DATA = "data"
    ROUTING = "routing"


@dataclass(frozen=True)
class TextPattern:
    """Regex pattern variant. Supports first-line localization."""

    regex: re.Pattern

    def matches(self, code: str) -> bool:
        return self.regex.search(code) is not None

    def first_matching_line(self, code: str) -> tuple[Optional[int], Optional[str]]:
        """Return (1-based line number, trimmed line) of the first line matching on its own.

        Each line is tested in isolation, so a pattern that only matched across
        several lines in the full text may localize to nothing.
        """
        for line_num, line in enumerate(code.split("\n"), start=1):
            if self.regex.search(line):
                return line_num, line.strip()
        return None, None

    def describe(self) -> str:
        return self.regex.pattern


@dataclass(frozen=True)
class Predicate:
    """Function pattern variant. Never localized."""

    fn: Callable[[str], bool]

    def matches(self, code: str) -> bool:
        return bool(self.fn(code))

    def describe(self) -> str:
        return "<predicate>"


RulePattern = Union[TextPattern, Predicate]


@dataclass(frozen=True)
class Rule:
    """An immutable catalog entry.

    id: Unique kebab-case identifier (e.g. "img-tag-usage").
    pattern: TextPattern or Predicate.
    recommendation: Prose remediation shown alongside findings.
    code_example / docs: Optional before/after snippet and reference URL.
    """

    id: str
    name: str
    description: str
    pattern: RulePattern
    severity: Severity
    category: Category
    recommendation: str
    code_example: Optional[str] = None
    docs: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "pattern": self.pattern.describe(),
            "severity": self.severity.value,
            "category": self.category.value,
            "recommendation": self.recommendation,
        }
        if self.code_example is not None:
            data["codeExample"] = self.code_example
        if self.docs is not None:
            data["docs"] = self.docs
        return data
