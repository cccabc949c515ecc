r"""
Literal encoder: turn a byte sequence into a C++ literal.

Two styles:

    string  "GIF89a\x01\x00"          (default, compact for text files)
    array   0x47, 0x49, 0x46, ...     (body of a brace-enclosed initializer)

Escape rules for the string style:

    "  \                 → \"  \\
    newline, CR, tab     → \n  \r  \t
    ? after a ?          → \?     (no trigraph can ever form)
    printable ASCII      → itself
    everything else      → \xHH   (two lowercase hex digits)

C++ hex escapes are greedy: "\x01A" is ONE character.  When a literal hex
digit follows a \xHH escape the literal is closed and reopened ("\x01""A"),
and the compiler's string concatenation glues the pieces back together.

Each call keeps its formatting state in locals, so nothing leaks between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bin2cpp.core.models.config import DEFAULT_LINE_WIDTH, MIN_LINE_WIDTH, LiteralStyle
from bin2cpp.core.models.registry import EncodedFile

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")

_SHORT_ESCAPES = {
    ord('"'): '\\"',
    ord("\\"): "\\\\",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
}

_NEWLINE = ord("\n")
_QUESTION = ord("?")


def _build_escape_table() -> tuple[str, ...]:
    table = []
    for byte in range(256):
        if byte in _SHORT_ESCAPES:
            table.append(_SHORT_ESCAPES[byte])
        elif 0x20 <= byte <= 0x7E:
            table.append(chr(byte))
        else:
            table.append(f"\\x{byte:02x}")
    return tuple(table)


# byte → emitted text, computed once
_ESCAPES = _build_escape_table()

_UNESCAPES = {"n": 0x0A, "r": 0x0D, "t": 0x09, '"': 0x22, "\\": 0x5C, "?": 0x3F, "'": 0x27}


# ═══════════════════════════════════════════════════════════════════
#  Encoding
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class LiteralEncoder:
    """Scoped formatter: holds the style and wrap width, nothing else."""

    style: LiteralStyle = "string"
    line_width: int = DEFAULT_LINE_WIDTH

    def __post_init__(self) -> None:
        if self.style not in ("string", "array"):
            raise ValueError(f"unknown literal style: {self.style!r}")
        if self.line_width < MIN_LINE_WIDTH:
            raise ValueError(f"line width must be at least {MIN_LINE_WIDTH}, got {self.line_width}")

    def encode(self, data: bytes) -> EncodedFile:
        """Encode ``data``; the byte count comes from ``data``, not the text."""
        if self.style == "array":
            text = self._encode_array(data)
        else:
            text = self._encode_string(data)
        logger.debug("Encoded %d bytes into %d chars (%s)", len(data), len(text), self.style)
        return EncodedFile(literal=text, byte_count=len(data), style=self.style)

    def _encode_string(self, data: bytes) -> str:
        lines: list[str] = []
        line: list[str] = []
        width = 0
        after_hex = False
        after_question = False

        for byte in data:
            if not line:
                line.append('"')
                width = 1
                after_hex = after_question = False

            piece = _ESCAPES[byte]
            if after_hex and byte in _HEX_DIGITS:
                piece = '""' + piece
            elif after_question and byte == _QUESTION:
                piece = "\\?"

            line.append(piece)
            width += len(piece)
            after_hex = piece.startswith("\\x")
            after_question = piece.endswith("?")

            if byte == _NEWLINE or width >= self.line_width:
                line.append('"')
                lines.append("".join(line))
                line = []

        if line:
            line.append('"')
            lines.append("".join(line))

        return "\n".join(lines) if lines else '""'

    def _encode_array(self, data: bytes) -> str:
        lines: list[str] = []
        tokens: list[str] = []
        width = 0

        for byte in data:
            token = f"0x{byte:02x}"
            width += len(token) + (2 if tokens else 0)
            tokens.append(token)
            if width >= self.line_width:
                lines.append(", ".join(tokens) + ",")
                tokens = []
                width = 0

        if tokens:
            lines.append(", ".join(tokens))
        elif lines:
            # drop the trailing comma of the last full line
            lines[-1] = lines[-1][:-1]

        return "\n".join(lines)


def encode_bytes(
    data: bytes,
    style: LiteralStyle = "string",
    line_width: int = DEFAULT_LINE_WIDTH,
) -> EncodedFile:
    """Shortcut for ``LiteralEncoder(style, line_width).encode(data)``."""
    return LiteralEncoder(style=style, line_width=line_width).encode(data)


# display names are short: never wrap them
_NAME_ENCODER = LiteralEncoder(style="string", line_width=1 << 30)


def quote_cpp_string(text: str) -> str:
    """Quote a display name as a single-line C++ string literal.

    Non-ASCII characters pass through as their UTF-8 bytes.
    """
    literal = _NAME_ENCODER.encode(text.encode("utf-8")).literal
    return " ".join(literal.splitlines())


# ═══════════════════════════════════════════════════════════════════
#  Decoding
# ═══════════════════════════════════════════════════════════════════


def decode_literal(text: str, style: LiteralStyle = "string") -> bytes:
    """Decode a literal produced by :class:`LiteralEncoder` back to bytes.

    Follows C++ rules (greedy hex escapes, adjacent literal concatenation)
    so it also proves the generated text means what the encoder intended.

    Raises:
        ValueError: If ``text`` is not a literal of the given style.
    """
    if style == "array":
        return _decode_array(text)
    if style == "string":
        return _decode_string(text)
    raise ValueError(f"unknown literal style: {style!r}")


def _decode_array(text: str) -> bytes:
    out = bytearray()
    for token in text.replace(",", " ").split():
        value = int(token, 0)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"array element out of byte range: {token}")
        out.append(value)
    return bytes(out)


def _decode_string(text: str) -> bytes:
    out = bytearray()
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch != '"':
            raise ValueError(f"unexpected character {ch!r} at offset {i}")
        i += 1

        # inside one quoted segment
        while True:
            if i >= n:
                raise ValueError("unterminated string literal")
            ch = text[i]
            if ch == '"':
                i += 1
                break
            if ch == "\n":
                raise ValueError(f"raw newline inside string literal at offset {i}")
            if ch != "\\":
                if ord(ch) > 0x7F:
                    raise ValueError(f"non-ASCII character {ch!r} at offset {i}")
                out.append(ord(ch))
                i += 1
                continue

            if i + 1 >= n:
                raise ValueError("dangling escape at end of literal")
            esc = text[i + 1]
            if esc == "x":
                j = i + 2
                while j < n and ord(text[j]) < 0x80 and ord(text[j]) in _HEX_DIGITS:
                    j += 1
                if j == i + 2:
                    raise ValueError(f"\\x without hex digits at offset {i}")
                value = int(text[i + 2 : j], 16)
                if value > 0xFF:
                    raise ValueError(f"hex escape out of range at offset {i}: {text[i:j]}")
                out.append(value)
                i = j
            elif esc in _UNESCAPES:
                out.append(_UNESCAPES[esc])
                i += 2
            else:
                raise ValueError(f"unsupported escape \\{esc} at offset {i}")

    return bytes(out)
