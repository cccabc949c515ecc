"""
Preview use cases: look at what would be generated, without writing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from bin2cpp.core.config.loader import load_optional_config
from bin2cpp.core.errors import Bin2CppError, GenerationError
from bin2cpp.core.models.config import DEFAULT_LINE_WIDTH
from bin2cpp.core.models.registry import EncodedFile, InputFile
from bin2cpp.core.services.discovery import resolve_inputs
from bin2cpp.core.services.literal_encoder import LiteralEncoder


@dataclass
class InputListing:
    """Resolved inputs with their identifiers and sizes."""

    files: list[InputFile] = field(default_factory=list)
    sizes: dict[str, int] = field(default_factory=dict)
    error: str | None = None

    @property
    def total_bytes(self) -> int:
        return sum(self.sizes.values())

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "count": len(self.files),
            "total_bytes": self.total_bytes,
            "files": [
                {
                    "name": f.display_name,
                    "identifier": f.identifier,
                    "size": self.sizes.get(f.identifier, 0),
                }
                for f in self.files
            ],
        }


def list_inputs(
    inputs: Sequence[str] | None = None,
    config_path: Path | None = None,
) -> InputListing:
    """Resolve inputs (from arguments, else from the manifest)."""
    listing = InputListing()
    try:
        if inputs:
            files = resolve_inputs(inputs)
        else:
            config, manifest = load_optional_config(config_path)
            files = resolve_inputs(config.inputs, base_dir=manifest.parent if manifest else None)
        for f in files:
            try:
                listing.sizes[f.identifier] = f.path.stat().st_size
            except OSError as e:
                raise GenerationError(f"failed to stat file {f.display_name}: {e.strerror or e}") from e
        listing.files = files
    except Bin2CppError as e:
        listing.error = str(e)
    return listing


def preview_literal(
    path: Path,
    style: str = "string",
    line_width: int = DEFAULT_LINE_WIDTH,
) -> EncodedFile:
    """Encode one file exactly as ``generate`` would.

    Raises:
        GenerationError: If the file can't be read.
        ValueError: On an unknown style or too small a width.
    """
    encoder = LiteralEncoder(style=style, line_width=line_width)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise GenerationError(f"failed to read file {path.as_posix()}: {e.strerror or e}") from e
    return encoder.encode(data)
