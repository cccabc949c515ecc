"""
Build the generated registries with a real C++11 compiler and run them.

The compiler is taken from $CXX, else the first of c++, g++, clang++ on
PATH.  The test program dumps every embedded file as hex; the dump must
match the input bytes exactly.
"""

import os
import random
import shutil
import subprocess
from pathlib import Path

import pytest

from bin2cpp.core.models.config import BuildConfig
from bin2cpp.core.services.discovery import resolve_inputs
from bin2cpp.core.services.registry_generate import build_context, generate_registry

CXX_FLAGS = ["-std=c++11", "-Wall", "-Wextra", "-Werror", "-trigraphs"]

_DUMP_FUNCTION = """\
int dump_@INDEX@() {
    int failures = 0;
    std::printf("registry %u\\n", static_cast<unsigned>(@NS@embeddedFileCount));
    if (@NS@fileList().size() != @NS@embeddedFileCount) {
        ++failures;
    }
    for (const auto & file : @NS@fileList()) {
        hex(file.name());
        std::printf(" %u ", static_cast<unsigned>(file.fileDataSize));
        hex(file.content());
        std::printf("\\n");
        if (file.content().size() != file.fileDataSize) {
            ++failures;
        }
        const std::string * cached = &file.content();
        if (cached != &file.content()) {
            ++failures;
        }
        if (@NS@findFile(file.name()) == nullptr) {
            ++failures;
        }
        if (@NS@mustGetFile(file.name()) != file.content()) {
            ++failures;
        }
        if (@NS@allEmbeddedFiles().at(file.name()) != file.content()) {
            ++failures;
        }
    }
    if (@NS@findFile("no such file") != nullptr) {
        ++failures;
    }
    try {
        @NS@mustGetFile("no such file");
        ++failures;
    } catch (const std::runtime_error & e) {
        if (std::string{ e.what() } != "embedded file not found: no such file") {
            ++failures;
        }
    }
    return failures;
}
"""

_MAIN = """\
#include <cstdio>
#include <stdexcept>
#include <string>
@INCLUDES@

namespace {

void hex(const std::string & text) {
    for (const char c : text) {
        std::printf("%02x", static_cast<unsigned>(static_cast<unsigned char>(c)));
    }
}

@FUNCTIONS@
} // namespace

int main() {
    const int failures = @CALLS@;
    std::printf("failures %d\\n", failures);
    return failures == 0 ? 0 : 1;
}
"""


@pytest.fixture(scope="module")
def cxx() -> str:
    compiler = os.environ.get("CXX") or next(
        (found for name in ("c++", "g++", "clang++") if (found := shutil.which(name))),
        None,
    )
    assert compiler, "a C++11 compiler is needed: install g++ or clang++, or set CXX"
    return compiler


def _payloads() -> dict[str, bytes]:
    rng = random.Random(5000)
    return {
        "golden_master.bin": bytes(range(256)),
        "empty.bin": b"",
        "a.bin": b"first",
        "a_bin": b"second",
        "a..b": b"double underscore",
        "trigraphs.txt": b"??= ??/ ??' ??( ??) ??! ??< ??> ??- ???\n",
        "hex_digits.bin": b"\x01A\x019\x7ff\xffF",
        "text.txt": b'line "1"\r\nline \\2\t\n\n',
        'we"ird.txt': b"quoted name",
        "random.bin": bytes(rng.randrange(256) for _ in range(5000)),
    }


def _write_inputs(root: Path, payloads: dict[str, bytes]) -> None:
    root.mkdir(parents=True)
    for name, data in payloads.items():
        (root / name).write_bytes(data)


def _generate(workdir: Path, inputs: list[str], base_name: str, namespace: str, style: str):
    files = resolve_inputs(inputs, base_dir=workdir)
    (workdir / "gen").mkdir(exist_ok=True)
    config = BuildConfig(base_name=base_name, namespace=namespace, style=style, line_width=40)
    return generate_registry(build_context(config, files, workdir / "gen"))


def _build_and_run(cxx: str, workdir: Path, registries: list[tuple[str, str]]) -> str:
    """Compile every (base name, namespace) registry with a dumping main()."""
    includes = "\n".join(f'#include "{base}.h"' for base, _ in registries)
    functions = "\n".join(
        _DUMP_FUNCTION.replace("@INDEX@", str(i)).replace(
            "@NS@", f"{ns}::" if ns else ""
        )
        for i, (_, ns) in enumerate(registries)
    )
    calls = " + ".join(f"dump_{i}()" for i in range(len(registries)))
    main_cpp = workdir / "main.cpp"
    main_cpp.write_text(
        _MAIN.replace("@INCLUDES@", includes)
        .replace("@FUNCTIONS@", functions)
        .replace("@CALLS@", calls)
    )

    exe = workdir / "registry_dump"
    sources = [str(workdir / "gen" / f"{base}.cpp") for base, _ in registries]
    build = subprocess.run(
        [cxx, *CXX_FLAGS, "-I", str(workdir / "gen"), *sources, str(main_cpp), "-o", str(exe)],
        capture_output=True,
        text=True,
        timeout=300,
    )
    assert build.returncode == 0, build.stderr

    run = subprocess.run([str(exe)], capture_output=True, text=True, timeout=60)
    assert run.returncode == 0, run.stdout + run.stderr
    return run.stdout


def _parse_dump(output: str) -> list[list[tuple[str, bytes]]]:
    """Split the dump into one [(name, content), ...] list per registry."""
    registries: list[list[tuple[str, bytes]]] = []
    for line in output.splitlines():
        if line.startswith("registry "):
            registries.append([])
        elif line.startswith("failures "):
            assert line == "failures 0"
        else:
            name_hex, size, content_hex = line.split(" ")
            content = bytes.fromhex(content_hex)
            assert int(size) == len(content)
            registries[-1].append((bytes.fromhex(name_hex).decode("utf-8"), content))
    return registries


class TestCompiledRegistry:
    @pytest.mark.parametrize("style", ["string", "array"])
    @pytest.mark.parametrize("namespace", ["", "a::b"])
    def test_contents_are_byte_exact(self, cxx: str, tmp_path: Path, style: str, namespace: str):
        payloads = _payloads()
        _write_inputs(tmp_path / "in", payloads)
        _generate(tmp_path, ["in"], "files", namespace, style)

        [dumped] = _parse_dump(_build_and_run(cxx, tmp_path, [("files", namespace)]))

        expected = sorted((f"in/{name}", data) for name, data in payloads.items())
        assert dumped == expected

    def test_several_registries_link_together(self, cxx: str, tmp_path: Path):
        _write_inputs(tmp_path / "one", {"a.txt": b"one", "b.bin": b"\x00\x01"})
        _write_inputs(tmp_path / "two", {"a.txt": b"two"})
        _generate(tmp_path, ["one"], "first", "first", "string")
        _generate(tmp_path, ["two"], "second", "res::second", "array")
        _generate(tmp_path, [], "nothing", "", "string")

        dumped = _parse_dump(
            _build_and_run(
                cxx,
                tmp_path,
                [("first", "first"), ("second", "res::second"), ("nothing", "")],
            )
        )

        assert dumped == [
            [("one/a.txt", b"one"), ("one/b.bin", b"\x00\x01")],
            [("two/a.txt", b"two")],
            [],
        ]
