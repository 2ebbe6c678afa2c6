from typing import Iterable, List, Sequence, Tuple


def _check_delimiter(delimiter: str) -> None:
    if not isinstance(delimiter, str) or delimiter == "":
        raise ValueError("Delimiter must be a non-empty string")


def read_lines(stream) -> List[str]:
    """Read a text stream into lines with their terminators removed.

    \\n, \\r\\n and \\r all end a line. A terminator at the very end of the
    input does not start another line; blank lines elsewhere are kept.
    """
    text = stream.read()
    if not text:
        return []
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def split_line(line: str, delimiter: str) -> List[str]:
    # Literal split: no trimming, no quoting, trailing empty fields kept
    _check_delimiter(delimiter)
    return line.split(delimiter)


def join_line(cells: Iterable[str], delimiter: str) -> str:
    _check_delimiter(delimiter)
    return delimiter.join(cells)


def parse_lines(lines: Sequence[str], delimiter: str) -> Tuple[List[str], List[List[str]]]:
    _check_delimiter(delimiter)
    if not lines:
        return [], []
    columns = split_line(lines[0], delimiter)
    rows = [split_line(line, delimiter) for line in lines[1:]]
    return columns, rows


def format_grid(
    columns: Sequence[str],
    rows: Iterable[Sequence[str]],
    delimiter: str,
    line_terminator: str,
) -> str:
    out = [join_line(columns, delimiter)]
    for row in rows:
        out.append(join_line(row, delimiter))
    return line_terminator.join(out)
