"""
Generated file model: used by both artifact generators.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A source artifact produced by one generation pass.

    Attributes:
        path:    Relative path from the output directory.
        content: Full file content.
        kind:    "header" (declarations) or "source" (definitions).
        reason:  Why this file was generated.
    """

    path: str
    content: str
    kind: str = "source"
    reason: str = ""
