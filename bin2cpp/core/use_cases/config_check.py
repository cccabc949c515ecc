"""
Config check use case: validate bin2cpp.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bin2cpp.core.config.loader import CONFIG_FILE, find_config_file, load_config
from bin2cpp.core.errors import ConfigError, InputResolutionError
from bin2cpp.core.models.config import BuildConfig
from bin2cpp.core.services.discovery import resolve_inputs
from bin2cpp.core.services.identifiers import make_identifier
from bin2cpp.core.services.registry_generate import build_context


@dataclass
class ConfigCheckResult:
    """Result of manifest validation."""

    valid: bool = False
    config: BuildConfig | None = None
    config_path: Path | None = None
    input_count: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "base_name": self.config.base_name if self.config else None,
            "namespace": self.config.namespace if self.config else None,
            "input_count": self.input_count,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the manifest and the inputs it names.

    Args:
        config_path: Optional explicit path to bin2cpp.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append(f"No {CONFIG_FILE} found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Base name / namespace: same validation as a real run
    try:
        build_context(config, [], Path(config.output_dir or "."))
    except ConfigError as e:
        result.errors.append(str(e))

    if not config.inputs:
        result.warnings.append("No inputs defined. The generated registry will be empty.")

    try:
        files = resolve_inputs(config.inputs, base_dir=config_path.parent)
    except InputResolutionError as e:
        result.errors.append(str(e))
        files = []
    result.input_count = len(files)

    if config.inputs and not files and not result.errors:
        result.warnings.append("Inputs resolve to no files. The generated registry will be empty.")

    # Identifier collisions are handled, but worth knowing about
    for f in files:
        natural = make_identifier(f.path)
        if f.identifier != natural:
            result.warnings.append(
                f"'{f.display_name}' renamed to {f.identifier} ({natural} already taken)"
            )

    if config.output_dir and not Path(config.output_dir).exists():
        result.warnings.append(f"Output directory will be created: {config.output_dir}")

    result.valid = len(result.errors) == 0
    return result
