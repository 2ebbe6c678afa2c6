import io

import pytest

from delimited_text import format_grid, parse_lines, read_lines, split_line


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("a,b\n", ["a,b"]),
        ("a,b\nc,d", ["a,b", "c,d"]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("a\rb", ["a", "b"]),
        ("h\n\nx\n", ["h", "", "x"]),
        ("h\n\n", ["h", ""]),
    ],
)
def test_read_lines(text, expected):
    assert read_lines(io.StringIO(text)) == expected


def test_split_line_keeps_trailing_empty_fields():
    assert split_line(",", ",") == ["", ""]
    assert split_line("a,,", ",") == ["a", "", ""]


def test_split_line_is_literal_not_regex():
    assert split_line("a.b|c", ".") == ["a", "b|c"]
    assert split_line("a||b", "||") == ["a", "b"]


def test_split_line_does_not_trim():
    assert split_line(" a , b ", ",") == [" a ", " b "]


def test_parse_lines_empty():
    assert parse_lines([], ",") == ([], [])


def test_parse_lines_header_and_ragged_rows():
    columns, rows = parse_lines(["a,b", "1", "1,2,3"], ",")
    assert columns == ["a", "b"]
    assert rows == [["1"], ["1", "2", "3"]]


def test_format_grid_has_no_trailing_terminator():
    text = format_grid(["a", "b"], [["1", "2"], ["", ""]], ";", "\n")
    assert text == "a;b\n1;2\n;"


def test_empty_delimiter_rejected():
    with pytest.raises(ValueError):
        split_line("a", "")
    with pytest.raises(ValueError):
        parse_lines(["a"], "")
