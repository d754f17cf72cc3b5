from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator, NamedTuple

# ASCII whitespace as used for blank/header detection (no vertical tab)
_WHITESPACE = b" \t\n\r\x0c"
_HASH = b"#"


class Line(NamedTuple):
    is_header: bool
    text: bytes


def normalize_line(raw: bytes) -> bytes:
    """Drop a trailing `\\n` and a `\\r` right before it (or a lone trailing `\\r`)."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw


def is_blank(line: bytes) -> bool:
    return not line.strip(_WHITESPACE)


def starts_with_hash(line: bytes) -> bool:
    return line.lstrip(_WHITESPACE).startswith(_HASH)


def read_lines(stream: BinaryIO) -> Iterator[bytes]:
    """Yield normalized, non-blank lines from a binary stream, lazily."""
    for raw in stream:
        line = normalize_line(raw)
        if is_blank(line):
            continue
        yield line


def classify_lines(lines: Iterable[bytes]) -> Iterator[Line]:
    """
    Tag each line as header or data.

    Only the first line starting with `#` (after leading whitespace) is a
    header; every other line, including later `#` lines, is data.
    """
    header_seen = False
    for line in lines:
        if not header_seen and starts_with_hash(line):
            header_seen = True
            yield Line(True, line)
            continue
        yield Line(False, line)


def iter_file_lines(stream: BinaryIO) -> Iterator[Line]:
    return classify_lines(read_lines(stream))
