"""Source file inputs shared by the code and bundle analyzers.

Callers pass either a filename -> text mapping or a sequence of
(filename, text) pairs; both analyzers walk them the same way.
"""

from collections.abc import Iterable, Mapping
from typing import Union

FileInput = Union[Mapping[str, str], Iterable[tuple[str, str]]]


def iter_files(files: FileInput) -> Iterable[tuple[str, str]]:
    """Yield (filename, text) pairs in input order."""
    if isinstance(files, Mapping):
        return files.items()
    return files
