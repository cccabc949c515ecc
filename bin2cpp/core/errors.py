"""
Error hierarchy: every failure the core can raise.

One base class so the single top-level boundary (the generate use case)
can catch everything the core raises and nothing else.
"""

from __future__ import annotations


class Bin2CppError(Exception):
    """Base class for all bin2cpp failures."""


class ConfigError(Bin2CppError):
    """Raised when configuration (manifest or options) is invalid or missing."""


class InputResolutionError(Bin2CppError):
    """Raised when an input path is neither a regular file nor a directory."""


class GenerationError(Bin2CppError):
    """Raised when an input can't be read or an artifact can't be written."""
