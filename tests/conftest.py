"""
Shared test fixtures and configuration.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from bin2cpp.core.services.literal_encoder import decode_literal


@pytest.fixture(autouse=True)
def _isolate_logging():
    """Undo setup_logging() calls made by a test (CLI runs make one each)."""
    logger = logging.getLogger("bin2cpp")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def golden_master() -> bytes:
    """Every byte value, 0 to 255, exactly once."""
    return bytes(range(256))


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory: write ``data`` to ``tmp_path / rel`` and return the path."""

    def _make(rel: str, data: bytes = b"") -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make


def embedded_bytes(body: str, identifier: str) -> bytes:
    """Decode the data literal of ``identifier`` out of a generated .cpp."""
    lines = body.splitlines()
    string_decl = f"const char {identifier}_data[] ="
    array_decl = f"const unsigned char {identifier}_data[] = {{"

    for i, line in enumerate(lines):
        if line == string_decl:
            segments = []
            for seg in lines[i + 1 :]:
                seg = seg.strip()
                if seg.endswith(";"):
                    segments.append(seg[:-1])
                    break
                segments.append(seg)
            return decode_literal("\n".join(segments), "string")

        if line == array_decl:
            elements = []
            for el in lines[i + 1 :]:
                if el == "};":
                    break
                elements.append(el.strip())
            data = decode_literal("\n".join(elements), "array")
            assert data[-1:] == b"\x00", "array literal must end with a terminator"
            return data[:-1]

    raise AssertionError(f"no data literal for {identifier}")


@pytest.fixture
def decode_embedded() -> Callable[[str, str], bytes]:
    return embedded_bytes
