"""
Configuration loader: reads bin2cpp.yml into a BuildConfig.

The manifest is optional: without one, every option comes from the
command line (or its default).  It reads YAML, validates against the
Pydantic schema, and anchors the output directory to the manifest directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from bin2cpp.core.errors import ConfigError
from bin2cpp.core.models.config import BuildConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "bin2cpp.yml"

# Optional wrapper key: the manifest may nest everything under it
_WRAPPER_KEY = "bin2cpp"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for bin2cpp.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to bin2cpp.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> BuildConfig:
    """Load and validate a manifest.

    A relative ``output_dir`` is made relative to the manifest directory.
    ``inputs`` stay as written: they double as embedded display names, and
    the caller anchors them with ``resolve_inputs(..., base_dir=...)``.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if _WRAPPER_KEY in data:
        data = data[_WRAPPER_KEY] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under '{_WRAPPER_KEY}' in {path}")

    try:
        config = BuildConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid build configuration in {path}: {e}") from e

    config = _anchor_paths(config, path.parent)
    logger.info("Loaded build config with %d input(s) from %s", len(config.inputs), path)
    return config


def load_optional_config(path: Path | None = None) -> tuple[BuildConfig, Path | None]:
    """Load ``path`` or the auto-detected manifest; defaults if there is none.

    Returns:
        (config, manifest path or None).
    """
    if path is None:
        path = find_config_file()
    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return BuildConfig(), None
    return load_config(path), path


def _anchor_paths(config: BuildConfig, base_dir: Path) -> BuildConfig:
    if not config.output_dir:
        return config
    return config.model_copy(update={"output_dir": _anchor(config.output_dir, base_dir)})


def _anchor(value: str, base_dir: Path) -> str:
    p = Path(value)
    if p.is_absolute():
        return value
    return (base_dir / p).as_posix()
