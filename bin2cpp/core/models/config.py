"""
Build configuration model: loaded from bin2cpp.yml.

Every field has a default so an empty manifest (or no manifest at all)
is a valid configuration. Command-line options are merged on top.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LiteralStyle = Literal["string", "array"]

DEFAULT_BASE_NAME = "embedded_files"
DEFAULT_LINE_WIDTH = 120
MIN_LINE_WIDTH = 16


class BuildConfig(BaseModel):
    """Options for one generation run.

    ``inputs`` are kept as written. The loader anchors a relative
    ``output_dir`` to the manifest directory.
    """

    inputs: list[str] = Field(default_factory=list)
    output_dir: str = ""
    base_name: str = DEFAULT_BASE_NAME
    namespace: str = ""
    style: LiteralStyle = "string"
    line_width: int = Field(default=DEFAULT_LINE_WIDTH, ge=MIN_LINE_WIDTH)
    header_extension: str = ".h"
    source_extension: str = ".cpp"

    def merged(self, **overrides: object) -> BuildConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return self.model_validate({**self.model_dump(), **changes})
