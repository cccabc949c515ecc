"""
Registry generation: run both passes and write the artifacts.

    header pass   render <base>.h, write it
    body pass     read + encode every input, render <base>.cpp, write it

The body is rendered completely in memory before its file is opened, so
an unreadable input never leaves a half-written <base>.cpp behind.  A
header written before the failure stays where it is.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from bin2cpp.core.errors import ConfigError, GenerationError
from bin2cpp.core.models.config import BuildConfig
from bin2cpp.core.models.registry import (
    EncodedFile,
    FileRecord,
    GenerationContext,
    InputFile,
)
from bin2cpp.core.models.template import GeneratedFile
from bin2cpp.core.services.generators.body import generate_body
from bin2cpp.core.services.generators.header import generate_header
from bin2cpp.core.services.literal_encoder import LiteralEncoder

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass
class GeneratedRegistry:
    """What one generation run produced."""

    header_path: Path
    source_path: Path
    records: list[FileRecord] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.records)

    @property
    def total_bytes(self) -> int:
        return sum(r.byte_count for r in self.records)

    def to_dict(self) -> dict:
        return {
            "header": self.header_path.as_posix(),
            "source": self.source_path.as_posix(),
            "file_count": self.file_count,
            "total_bytes": self.total_bytes,
            "files": [
                {
                    "name": r.display_name,
                    "identifier": r.identifier,
                    "size": r.byte_count,
                }
                for r in self.records
            ],
        }


def build_context(
    config: BuildConfig,
    inputs: Sequence[InputFile],
    output_dir: Path,
) -> GenerationContext:
    """Freeze the configuration and resolved inputs into a GenerationContext.

    Raises:
        ConfigError: If the base name, namespace or identifiers are invalid.
    """
    try:
        return GenerationContext(
            inputs=tuple(inputs),
            output_dir=output_dir,
            base_name=config.base_name,
            namespace=config.namespace,
            style=config.style,
            line_width=config.line_width,
            header_extension=config.header_extension,
            source_extension=config.source_extension,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise ConfigError(f"invalid generation options: {messages}") from e


def read_input(input_file: InputFile) -> bytes:
    """Read the raw bytes of one input.

    Raises:
        GenerationError: If the file vanished or can't be read.
    """
    try:
        return input_file.path.read_bytes()
    except OSError as e:
        raise GenerationError(
            f"failed to read file {input_file.display_name}: {e.strerror or e}"
        ) from e


def write_artifact(output_dir: Path, generated: GeneratedFile) -> Path:
    """Write a GeneratedFile below ``output_dir`` (truncating overwrite).

    Raises:
        GenerationError: If the destination can't be opened or written.
    """
    target = output_dir / generated.path
    try:
        with open(target, "w", encoding="utf-8", newline="\n") as stream:
            stream.write(generated.content)
    except OSError as e:
        raise GenerationError(
            f"failed to create {generated.kind} file {target.as_posix()}: {e.strerror or e}"
        ) from e

    logger.info("Wrote %s (%d chars)", target, len(generated.content))
    return target


def encode_inputs(
    context: GenerationContext,
    progress: ProgressCallback | None = None,
) -> list[tuple[FileRecord, EncodedFile]]:
    """Read and encode every input, in order."""
    encoder = LiteralEncoder(style=context.style, line_width=context.line_width)
    entries: list[tuple[FileRecord, EncodedFile]] = []

    for input_file in context.inputs:
        _emit(progress, f"  {input_file.display_name}")
        encoded = encoder.encode(read_input(input_file))
        record = FileRecord(
            display_name=input_file.display_name,
            identifier=input_file.identifier,
            byte_count=encoded.byte_count,
        )
        entries.append((record, encoded))

    return entries


def generate_registry(
    context: GenerationContext,
    progress: ProgressCallback | None = None,
) -> GeneratedRegistry:
    """Generate and write the declarations then the definitions artifact.

    Args:
        context: The frozen run configuration.
        progress: Called with one line per artifact and per input file.

    Raises:
        GenerationError: On any read or write failure.
    """
    _emit(progress, f"Generating {context.header_path.as_posix()}...")
    header_path = write_artifact(context.output_dir, generate_header(context))

    _emit(progress, f"Generating {context.source_path.as_posix()}...")
    entries = encode_inputs(context, progress)
    source_path = write_artifact(context.output_dir, generate_body(context, entries))

    registry = GeneratedRegistry(
        header_path=header_path,
        source_path=source_path,
        records=[record for record, _ in entries],
    )
    logger.info(
        "Embedded %d file(s), %d bytes, into %s",
        registry.file_count,
        registry.total_bytes,
        context.base_name,
    )
    return registry


def _emit(progress: ProgressCallback | None, line: str) -> None:
    if progress is not None:
        progress(line)
