"""Tree-shaking import scanner.

Flags import styles that pull a whole package into the bundle when only a
few exports are used. Only JS/TS source files are scanned.
"""

import logging
import re
from dataclasses import dataclass

from perfpilot.bundle.types import TreeshakingIssue
from perfpilot.sources import FileInput, iter_files

logger = logging.getLogger(__name__)

SCANNABLE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")


@dataclass(frozen=True)
class ImportPattern:
    """A non-tree-shakeable import style for one package.

    module is the import specifier the regex targets and is what gets
    reported as the offending dependency.
    """

    module: str
    regex: re.Pattern
    recommendation: str


TREESHAKING_PATTERNS: tuple[ImportPattern, ...] = (
    ImportPattern(
        module="lodash",
        regex=re.compile(r"""import\s+.*\s+from\s+['"]lodash['"]"""),
        recommendation="Import specific functions from lodash-es or use native methods",
    ),
    ImportPattern(
        module="@mui/material",
        regex=re.compile(r"""import\s+.*\s+from\s+['"]@mui/material['"]"""),
        recommendation='Import specific components, e.g., import Button from "@mui/material/Button"',
    ),
    ImportPattern(
        module="antd",
        regex=re.compile(r"""import\s+.*\s+from\s+['"]antd['"]"""),
        recommendation='Import specific components, e.g., import { Button } from "antd/es/button"',
    ),
    ImportPattern(
        module="react-icons/fa",
        regex=re.compile(r"""import\s+\{[^}]+\}\s+from\s+['"]react-icons/fa['"]"""),
        recommendation='Import specific icons, e.g., import { FaArrow } from "react-icons/fa/FaArrow"',
    ),
)


def scan_imports(files: FileInput) -> list[TreeshakingIssue]:
    """Scan source files for non-tree-shakeable imports.

    Each pattern contributes at most one issue per file: the first match.
    """
    issues: list[TreeshakingIssue] = []

    for filename, content in iter_files(files):
        if not filename.endswith(SCANNABLE_EXTENSIONS):
            continue

        for pattern in TREESHAKING_PATTERNS:
            match = pattern.regex.search(content)
            if match:
                issues.append(
                    TreeshakingIssue(
                        dependency=pattern.module,
                        import_statement=match.group(0),
                        recommendation=pattern.recommendation,
                    )
                )

    logger.debug("Tree-shaking scan found %d issues", len(issues))
    return issues
