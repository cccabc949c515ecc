"""
Body generator: the definitions artifact (``<base>.cpp``).

Layout:

    #include "<base>.h"

    namespace /* anonymous */ {       per-file constants, private to this file
        <id>_name, <id>_size, <id>_data, <id>_content()
    }

    namespace <ns> {                  symbols declared by the header
        embeddedFileCount
        embeddedFileList[]            one record per file + an end marker
    }

The end marker keeps the array non-empty when no file is embedded.
"""

from __future__ import annotations

from collections.abc import Sequence

from bin2cpp.core.models.registry import EncodedFile, FileRecord, GenerationContext
from bin2cpp.core.models.template import GeneratedFile
from bin2cpp.core.services.generators.common import BANNER, close_namespace, open_namespace
from bin2cpp.core.services.literal_encoder import quote_cpp_string

_INDENT = "    "

_END_MARKER = "{ nullptr, nullptr, 0, nullptr } // end marker"


def generate_body(
    context: GenerationContext,
    entries: Sequence[tuple[FileRecord, EncodedFile]],
) -> GeneratedFile:
    """Render the definitions artifact.

    Args:
        context: The generation context (namespace, header name).
        entries: One (record, encoded data) pair per input, in input order.
    """
    lines = [
        BANNER.rstrip("\n"),
        f'#include "{context.header_name}"',
        "",
        "namespace /* anonymous */ {",
    ]

    for record, encoded in entries:
        lines.append("")
        lines.extend(_file_block(record, encoded))

    lines.append("")
    lines.append("} // namespace")
    lines.append("")

    lines.extend(open_namespace(context))
    lines.append(f"const std::size_t embeddedFileCount = {len(entries)};")
    lines.append("")
    lines.append("const EmbeddedFile embeddedFileList[] = {")
    for record, encoded in entries:
        lines.append(_INDENT + _record_initializer(record, encoded))
    lines.append(_INDENT + _END_MARKER)
    lines.append("};")
    lines.extend(close_namespace(context))

    return GeneratedFile(
        path=context.source_name,
        content="\n".join(lines) + "\n",
        kind="source",
        reason=f"Definitions for {len(entries)} embedded file(s)",
    )


def _file_block(record: FileRecord, encoded: EncodedFile) -> list[str]:
    """Constants and content loader of one file."""
    name = quote_cpp_string(record.display_name)
    lines = [
        f"// file {name}",
        f"const char * const {record.name_symbol} = {name};",
        f"const std::size_t {record.size_symbol} = {record.byte_count};",
    ]

    if encoded.style == "array":
        lines.append(f"const unsigned char {record.data_symbol}[] = {{")
        body = encoded.literal.splitlines()
        if body:
            body[-1] += ","
        # explicit terminator, matching the implicit one of string literals
        body.append("0")
        lines.extend(_INDENT + line for line in body)
        lines.append("};")
    else:
        lines.append(f"const char {record.data_symbol}[] =")
        segments = encoded.literal.splitlines()
        segments[-1] += ";"
        lines.extend(_INDENT + segment for segment in segments)

    lines.extend([
        "",
        f"const std::string & {record.loader_symbol}() {{",
        f"{_INDENT}static const std::string s_content{{ {_data_pointer(record, encoded)}, "
        f"{record.size_symbol} }};",
        f"{_INDENT}return s_content;",
        "}",
    ])
    return lines


def _record_initializer(record: FileRecord, encoded: EncodedFile) -> str:
    return (
        f"{{ {record.name_symbol}, {_data_pointer(record, encoded)}, "
        f"{record.size_symbol}, &{record.loader_symbol} }},"
    )


def _data_pointer(record: FileRecord, encoded: EncodedFile) -> str:
    if encoded.style == "array":
        return f"reinterpret_cast<const char *>({record.data_symbol})"
    return record.data_symbol
