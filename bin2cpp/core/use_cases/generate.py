"""
Generate use case, the one boundary where core errors are caught.

Resolves the configuration (manifest + command-line overrides), expands
the inputs, prepares the output directory and runs both generation
passes.  Any ``Bin2CppError`` raised on the way ends the run and is
reported in ``GenerateResult.error``; nothing is retried or skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from bin2cpp.core.config.loader import load_optional_config
from bin2cpp.core.errors import Bin2CppError, ConfigError
from bin2cpp.core.models.config import BuildConfig
from bin2cpp.core.services.discovery import resolve_inputs
from bin2cpp.core.services.registry_generate import (
    GeneratedRegistry,
    ProgressCallback,
    build_context,
    generate_registry,
)

logger = logging.getLogger(__name__)

NO_INPUT_WARNING = "no input file to process, will generate empty C++ output!"


@dataclass
class GenerateResult:
    """Result of one generation run."""

    config_path: Path | None = None
    output_dir: Path | None = None
    registry: GeneratedRegistry | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.registry is not None

    def to_dict(self) -> dict:
        d: dict = {
            "ok": self.ok,
            "config_path": str(self.config_path) if self.config_path else None,
            "output_dir": self.output_dir.as_posix() if self.output_dir else None,
            "warnings": self.warnings,
        }
        if self.registry is not None:
            d.update(self.registry.to_dict())
        if self.error:
            d["error"] = self.error
        return d


def run_generate(
    *,
    config_path: Path | None = None,
    inputs: Sequence[str] | None = None,
    output_dir: str | None = None,
    base_name: str | None = None,
    namespace: str | None = None,
    style: str | None = None,
    line_width: int | None = None,
    progress: ProgressCallback | None = None,
) -> GenerateResult:
    """Generate the header/source pair.

    Every keyword left to None falls back to the manifest, then to the
    built-in default.  Inputs given here replace the manifest's inputs
    and are taken relative to the current directory.

    Args:
        config_path: Explicit manifest path (default: auto-detect).
        progress: Receives the console progress lines.

    Returns:
        GenerateResult, with ``error`` set on failure.
    """
    result = GenerateResult()

    try:
        config, manifest = load_optional_config(config_path)
        result.config_path = manifest

        config = _apply_overrides(
            config,
            output_dir=output_dir,
            base_name=base_name,
            namespace=namespace,
            style=style,
            line_width=line_width,
        )

        if inputs:
            input_files = resolve_inputs(inputs)
        else:
            base_dir = manifest.parent if manifest else None
            input_files = resolve_inputs(config.inputs, base_dir=base_dir)

        result.output_dir = prepare_output_dir(config.output_dir, progress)

        if not input_files:
            result.warnings.append(NO_INPUT_WARNING)
            logger.warning("Warning: %s", NO_INPUT_WARNING)
        elif progress is not None:
            progress(f"Ready to process {len(input_files)} file(s).")

        context = build_context(config, input_files, result.output_dir)
        result.registry = generate_registry(context, progress)

    except Bin2CppError as e:
        logger.debug("Generation aborted", exc_info=True)
        result.error = str(e)

    return result


def prepare_output_dir(output_dir: str, progress: ProgressCallback | None = None) -> Path:
    """Return the output directory, creating it when missing.

    An empty value means the current directory.

    Raises:
        ConfigError: If the directory can't be created or is a file.
    """
    if not output_dir:
        path = Path.cwd()
        if progress is not None:
            progress(f"Using {path.as_posix()} as output dir")
        return path

    path = Path(output_dir)
    if path.exists():
        if not path.is_dir():
            raise ConfigError(f"output path is not a directory: {output_dir}")
        return path

    if progress is not None:
        progress(f"Creating output dir {path.as_posix()}")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"cannot create output directory {output_dir}: {e.strerror or e}") from e
    return path


def _apply_overrides(config: BuildConfig, **overrides: object) -> BuildConfig:
    try:
        return config.merged(**overrides)
    except ValueError as e:
        raise ConfigError(f"invalid option value: {e}") from e
