"""
Domain models: Pydantic types for bin2cpp.

All models are re-exported here for convenient access:

    from bin2cpp.core.models import BuildConfig, GenerationContext, InputFile
"""

from bin2cpp.core.models.config import BuildConfig, LiteralStyle
from bin2cpp.core.models.registry import (
    EncodedFile,
    FileRecord,
    GenerationContext,
    InputFile,
)
from bin2cpp.core.models.template import GeneratedFile

__all__ = [
    # config.py
    "BuildConfig",
    "LiteralStyle",
    # registry.py
    "EncodedFile",
    "FileRecord",
    "GenerationContext",
    "InputFile",
    # template.py
    "GeneratedFile",
]
