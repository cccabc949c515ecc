"""
C++ identifiers for embedded files.

Every symbol generated for a file starts with an identifier derived from
the file's base name:

    logo.png        → file_logo_png
    my data-1.bin   → file_my_data_1_bin
    données.txt     → file_donn_es_txt
    a..b            → file_a__b

Two files can map to the same identifier (``a.bin`` and ``a_bin``, or
``x/readme.md`` and ``y/readme.md``).  The first one keeps it, later
ones get the first free ``_2``, ``_3``, … suffix.

Each unsafe character maps to exactly one underscore: runs are not
collapsed, so ``a..b`` and ``a.b`` keep distinct identifiers.
"""

from __future__ import annotations

import re
from pathlib import PurePath

IDENTIFIER_PREFIX = "file_"

_UNSAFE = re.compile(r"[^A-Za-z0-9]")


def make_identifier(path: str | PurePath) -> str:
    """Derive the (not yet de-duplicated) identifier for ``path``.

    The result only contains ``[A-Za-z0-9_]``, never starts with a digit
    and never collides with a C++ keyword, thanks to the prefix.
    """
    return IDENTIFIER_PREFIX + _UNSAFE.sub("_", PurePath(path).name)


class IdentifierAllocator:
    """Hand out unique identifiers, in call order."""

    def __init__(self) -> None:
        self._taken: set[str] = set()

    def allocate(self, path: str | PurePath) -> str:
        base = make_identifier(path)
        candidate = base
        ordinal = 2
        while candidate in self._taken:
            candidate = f"{base}_{ordinal}"
            ordinal += 1
        self._taken.add(candidate)
        return candidate

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._taken

    def __len__(self) -> int:
        return len(self._taken)
