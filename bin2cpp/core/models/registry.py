"""
Registry models: the files being embedded and the run that embeds them.

InputFile → (encode) → EncodedFile → FileRecord, all collected in one
read-only GenerationContext per invocation.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bin2cpp.core.models.config import DEFAULT_LINE_WIDTH, MIN_LINE_WIDTH, LiteralStyle

_CPP_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# C++11 keywords and alternative tokens
_CPP_KEYWORDS = frozenset("""
    alignas alignof and and_eq asm auto bitand bitor bool break case catch
    char char16_t char32_t class compl const constexpr const_cast continue
    decltype default delete do double dynamic_cast else enum explicit export
    extern false float for friend goto if inline int long mutable namespace
    new noexcept not not_eq nullptr operator or or_eq private protected
    public register reinterpret_cast return short signed sizeof static
    static_assert static_cast struct switch template this thread_local throw
    true try typedef typeid typename union unsigned using virtual void
    volatile wchar_t while xor xor_eq
""".split())


class InputFile(BaseModel):
    """One file to embed.

    ``path`` is where the bytes are read from. ``display_name`` is the
    name embedded in the generated code. ``identifier`` prefixes every
    C++ symbol generated for this file.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    display_name: str
    identifier: str


class EncodedFile(BaseModel):
    """Literal-encoded bytes of one file.

    ``byte_count`` is the length of the raw data, never of ``literal``
    (escape sequences make the text longer than the data).
    """

    model_config = ConfigDict(frozen=True)

    literal: str
    byte_count: int = Field(ge=0)
    style: LiteralStyle = "string"


class FileRecord(BaseModel):
    """Metadata row emitted into ``embeddedFileList``."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    identifier: str
    byte_count: int = Field(ge=0)

    @property
    def name_symbol(self) -> str:
        return f"{self.identifier}_name"

    @property
    def size_symbol(self) -> str:
        return f"{self.identifier}_size"

    @property
    def data_symbol(self) -> str:
        return f"{self.identifier}_data"

    @property
    def loader_symbol(self) -> str:
        return f"{self.identifier}_content"


class GenerationContext(BaseModel):
    """Everything one invocation needs. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    inputs: tuple[InputFile, ...] = ()
    output_dir: Path
    base_name: str
    namespace: str = ""
    style: LiteralStyle = "string"
    line_width: int = Field(default=DEFAULT_LINE_WIDTH, ge=MIN_LINE_WIDTH)
    header_extension: str = ".h"
    source_extension: str = ".cpp"

    @field_validator("base_name")
    @classmethod
    def _check_base_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("output base name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError(f"output base name must not contain a path separator: {value!r}")
        return value

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, value: str) -> str:
        for part in namespace_parts(value):
            if not _CPP_IDENTIFIER.match(part):
                raise ValueError(f"invalid C++ namespace name: {value!r}")
            if part in _CPP_KEYWORDS:
                raise ValueError(f"C++ keyword used as a namespace name: {part!r}")
            if "__" in part or (part[0] == "_" and part[1:2].isupper()):
                raise ValueError(f"reserved C++ name used as a namespace name: {part!r}")
        return value

    @model_validator(mode="after")
    def _check_unique_identifiers(self) -> GenerationContext:
        seen: set[str] = set()
        for f in self.inputs:
            if f.identifier in seen:
                raise ValueError(f"duplicate identifier {f.identifier!r} for {f.display_name}")
            seen.add(f.identifier)
        return self

    @property
    def header_name(self) -> str:
        return self.base_name + self.header_extension

    @property
    def source_name(self) -> str:
        return self.base_name + self.source_extension

    @property
    def header_path(self) -> Path:
        return self.output_dir / self.header_name

    @property
    def source_path(self) -> Path:
        return self.output_dir / self.source_name

    @property
    def namespaces(self) -> list[str]:
        return namespace_parts(self.namespace)


def namespace_parts(namespace: str) -> list[str]:
    """Split ``a::b`` into ``["a", "b"]``; the empty namespace has no parts."""
    if not namespace:
        return []
    return namespace.split("::")
