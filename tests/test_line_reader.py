import io

from magmerge.app_services.line_reader import (
    Line,
    is_blank,
    iter_file_lines,
    normalize_line,
    read_lines,
    starts_with_hash,
)


def _lines(data: bytes):
    return list(iter_file_lines(io.BytesIO(data)))


def test_normalize_line_strips_lf_and_crlf_only():
    assert normalize_line(b"abc\n") == b"abc"
    assert normalize_line(b"abc\r\n") == b"abc"
    assert normalize_line(b"abc\r") == b"abc"
    assert normalize_line(b"abc") == b"abc"
    assert normalize_line(b"abc \t\n") == b"abc \t"


def test_blank_and_header_detection():
    assert is_blank(b"")
    assert is_blank(b" \t \x0c")
    assert not is_blank(b" x ")
    assert starts_with_hash(b"#H")
    assert starts_with_hash(b"  \t# H")
    assert not starts_with_hash(b"x # H")
    assert not starts_with_hash(b"")


def test_read_lines_skips_blank_lines():
    stream = io.BytesIO(b"\n   \n\t\r\n42\n  \n")
    assert list(read_lines(stream)) == [b"42"]


def test_only_first_hash_line_is_header():
    """
    Header detection stops after the first hit: later `#` lines are data,
    and a header may come after data lines.
    """
    lines = _lines(b"1\n# H\n2\n# again\n3")
    assert lines == [
        Line(False, b"1"),
        Line(True, b"# H"),
        Line(False, b"2"),
        Line(False, b"# again"),
        Line(False, b"3"),
    ]


def test_lines_are_bytes_and_untouched():
    lines = _lines(b"#\xff header\r\n\xfe;1;2 \r\n")
    assert lines == [Line(True, b"#\xff header"), Line(False, b"\xfe;1;2 ")]
