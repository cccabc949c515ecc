"""
Tests for the header and body generators.

Pure unit tests: GenerationContext (+ encoded data) in → GeneratedFile out.
Nothing is read from or written to disk.
"""

from pathlib import Path

import pytest

from bin2cpp.core.models.registry import FileRecord, GenerationContext, InputFile
from bin2cpp.core.services.generators.body import generate_body
from bin2cpp.core.services.generators.common import include_guard
from bin2cpp.core.services.generators.header import generate_header
from bin2cpp.core.services.literal_encoder import encode_bytes


def _context(names: list[str] = (), namespace: str = "ns", style: str = "string", **kw):
    inputs = tuple(
        InputFile(path=Path(n), display_name=n, identifier=f"file_{i}")
        for i, n in enumerate(names)
    )
    return GenerationContext(
        inputs=inputs,
        output_dir=Path("out"),
        base_name=kw.pop("base_name", "out"),
        namespace=namespace,
        style=style,
        **kw,
    )


def _entries(context: GenerationContext, payloads: list[bytes]):
    entries = []
    for input_file, data in zip(context.inputs, payloads):
        encoded = encode_bytes(data, style=context.style, line_width=context.line_width)
        record = FileRecord(
            display_name=input_file.display_name,
            identifier=input_file.identifier,
            byte_count=encoded.byte_count,
        )
        entries.append((record, encoded))
    return entries


# ═══════════════════════════════════════════════════════════════════
#  include_guard
# ═══════════════════════════════════════════════════════════════════


class TestIncludeGuard:
    def test_with_namespace(self):
        assert include_guard(_context(namespace="ns")) == "GENERATED_BIN2CPP_NS_OUT_H"

    def test_without_namespace(self):
        assert include_guard(_context(namespace="")) == "GENERATED_BIN2CPP_OUT_H"

    def test_unique_per_base_name_and_namespace(self):
        guards = {
            include_guard(_context(namespace=ns, base_name=base))
            for ns in ("", "a", "b")
            for base in ("x", "y")
        }
        assert len(guards) == 6

    def test_nested_namespace_and_odd_base_name(self):
        ctx = _context(namespace="a::b", base_name="my-files")
        assert include_guard(ctx) == "GENERATED_BIN2CPP_A__B_MY_FILES_H"


# ═══════════════════════════════════════════════════════════════════
#  generate_header
# ═══════════════════════════════════════════════════════════════════


class TestGenerateHeader:
    def test_file_name_and_kind(self):
        header = generate_header(_context())
        assert header.path == "out.h"
        assert header.kind == "header"

    def test_guard_wraps_everything(self):
        content = generate_header(_context()).content
        lines = content.splitlines()
        assert lines[0].startswith("// This file was generated by bin2cpp")
        assert "#ifndef GENERATED_BIN2CPP_NS_OUT_H" in lines
        assert "#define GENERATED_BIN2CPP_NS_OUT_H" in lines
        assert lines[-1] == "#endif // GENERATED_BIN2CPP_NS_OUT_H"

    def test_consumer_api(self):
        content = generate_header(_context()).content
        for decl in (
            "struct EmbeddedFile {",
            "const char * fileName;",
            "const char * fileData;",
            "std::size_t fileDataSize;",
            "std::string name() const {",
            "const std::string & content() const {",
            "extern const std::size_t embeddedFileCount;",
            "extern const EmbeddedFile embeddedFileList[];",
            "struct EmbeddedFileRange {",
            "const EmbeddedFile * begin() const {",
            "const EmbeddedFile * end() const {",
            "std::size_t size() const {",
            "inline EmbeddedFileRange fileList() {",
            "inline const EmbeddedFile * findFile(const std::string & fileName) {",
            "inline const std::map<std::string, std::string> & allEmbeddedFiles() {",
            "inline const std::string & mustGetFile(const std::string & fileName) {",
        ):
            assert decl in content, f"Missing: {decl}"

    def test_lookup_by_name(self):
        content = generate_header(_context()).content
        assert "#include <map>" in content
        assert "#include <stdexcept>" in content
        assert 'throw std::runtime_error{ "embedded file not found: " + fileName };' in content
        range_at = content.index("inline EmbeddedFileRange fileList()")
        find_at = content.index("inline const EmbeddedFile * findFile(")
        must_at = content.index("inline const std::string & mustGetFile(")
        assert range_at < find_at < must_at

    def test_namespace_wrapping(self):
        content = generate_header(_context(namespace="ns")).content
        assert "namespace ns {" in content
        assert "} // namespace ns" in content
        assert content.index("namespace ns {") < content.index("struct EmbeddedFile")
        assert content.index("} // namespace ns") > content.index("inline EmbeddedFileRange")

    def test_no_namespace(self):
        content = generate_header(_context(namespace="")).content
        assert "namespace" not in content

    def test_nested_namespace(self):
        content = generate_header(_context(namespace="a::b")).content
        assert "namespace a {\nnamespace b {" in content
        assert "} // namespace b\n} // namespace a" in content

    def test_same_declarations_for_any_registry(self):
        """Code written against one registry compiles against any other."""
        empty = generate_header(_context([])).content
        full = generate_header(_context(["a", "b", "c"])).content
        assert empty == full


# ═══════════════════════════════════════════════════════════════════
#  generate_body
# ═══════════════════════════════════════════════════════════════════


class TestGenerateBody:
    def test_file_name_and_include(self):
        ctx = _context()
        body = generate_body(ctx, [])
        assert body.path == "out.cpp"
        assert '#include "out.h"' in body.content

    def test_four_byte_scenario(self, decode_embedded):
        ctx = _context(["input/a.bin"])
        content = generate_body(ctx, _entries(ctx, [b"\x00\x41\x0a\xff"])).content

        assert 'const char * const file_0_name = "input/a.bin";' in content
        assert "const std::size_t file_0_size = 4;" in content
        assert "const std::size_t embeddedFileCount = 1;" in content
        assert "{ file_0_name, file_0_data, file_0_size, &file_0_content }," in content
        assert decode_embedded(content, "file_0") == b"\x00\x41\x0a\xff"

    def test_per_file_symbols_are_private(self):
        ctx = _context(["a"])
        content = generate_body(ctx, _entries(ctx, [b"x"])).content
        anon_start = content.index("namespace /* anonymous */ {")
        anon_end = content.index("} // namespace\n")
        for symbol in ("file_0_name", "file_0_size", "file_0_data[]", "file_0_content()"):
            pos = content.index(symbol)
            assert anon_start < pos < anon_end, symbol

    def test_content_loader_is_cached(self):
        ctx = _context(["a"])
        content = generate_body(ctx, _entries(ctx, [b"x"])).content
        assert "const std::string & file_0_content() {" in content
        assert "static const std::string s_content{ file_0_data, file_0_size };" in content

    def test_records_in_input_order(self):
        ctx = _context(["c", "a", "b"])
        content = generate_body(ctx, _entries(ctx, [b"3", b"1", b"2"])).content
        positions = [content.index(f"{{ file_{i}_name,") for i in range(3)]
        assert positions == sorted(positions)
        assert "const std::size_t embeddedFileCount = 3;" in content

    def test_zero_files(self):
        content = generate_body(_context([]), []).content
        assert "const std::size_t embeddedFileCount = 0;" in content
        assert (
            "const EmbeddedFile embeddedFileList[] = {\n"
            "    { nullptr, nullptr, 0, nullptr } // end marker\n"
            "};"
        ) in content

    def test_length_is_byte_count_not_text_length(self):
        ctx = _context(["z"])
        content = generate_body(ctx, _entries(ctx, [b"\x00" * 50])).content
        assert "const std::size_t file_0_size = 50;" in content

    def test_namespace_toggle_changes_only_wrapping(self):
        with_ns = _context(["a"], namespace="ns")
        without = _context(["a"], namespace="")
        a = generate_body(with_ns, _entries(with_ns, [b"data"])).content
        b = generate_body(without, _entries(without, [b"data"])).content

        marker = "} // namespace\n"
        assert a[: a.index(marker)] == b[: b.index(marker)]
        assert "namespace ns {" in a
        assert "} // namespace ns" in a
        assert "namespace ns" not in b

    def test_display_name_is_escaped(self):
        ctx = _context(['we"ird\\name'])
        content = generate_body(ctx, _entries(ctx, [b""])).content
        assert 'const char * const file_0_name = "we\\"ird\\\\name";' in content

    def test_empty_file(self, decode_embedded):
        ctx = _context(["empty"])
        content = generate_body(ctx, _entries(ctx, [b""])).content
        assert "const std::size_t file_0_size = 0;" in content
        assert decode_embedded(content, "file_0") == b""


class TestGenerateBodyArrayStyle:
    def test_array_declaration(self, decode_embedded, golden_master: bytes):
        ctx = _context(["g.bin"], style="array")
        content = generate_body(ctx, _entries(ctx, [golden_master])).content
        assert "const unsigned char file_0_data[] = {" in content
        assert "reinterpret_cast<const char *>(file_0_data)" in content
        assert decode_embedded(content, "file_0") == golden_master

    def test_empty_array_still_compiles(self, decode_embedded):
        ctx = _context(["e"], style="array")
        content = generate_body(ctx, _entries(ctx, [b""])).content
        assert "const unsigned char file_0_data[] = {\n    0\n};" in content
        assert decode_embedded(content, "file_0") == b""

    @pytest.mark.parametrize("size", [1, 19, 20, 21, 500])
    def test_array_sizes(self, decode_embedded, size: int):
        data = bytes(i % 256 for i in range(size))
        ctx = _context(["f"], style="array")
        content = generate_body(ctx, _entries(ctx, [data])).content
        assert decode_embedded(content, "file_0") == data
