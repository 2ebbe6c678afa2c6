import io
import os
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from delimited_text import format_grid, parse_lines, read_lines


class ParseError(Exception):
    """The source of a load could not be opened or read."""


@dataclass(frozen=True)
class TableChange:
    kind: str  # "insert" or "update"
    row: int
    column: Optional[int] = None


def cell_text(value) -> str:
    if value is None:
        return ""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return str(value)


class TableModel:
    """
    Owns the header and rows of one delimited file.
    Fires change notifications after every mutation; no rendering or input logic.
    """

    def __init__(self, columns: Sequence[str] = (), rows: Sequence[Sequence] = ()):
        self._columns: Tuple[str, ...] = tuple(columns)
        self._rows: List[list] = [list(row) for row in rows]
        self._dirty = False
        self._listeners: List[Callable[[TableChange], None]] = []

    # ---------- loading ----------
    @classmethod
    def load(cls, source, delimiter: str = ",") -> "TableModel":
        """Build a clean model from a path or an open text stream.

        Raises ParseError when the source cannot be opened or read. Rows are
        never rejected: a line with more or fewer fields than the header is
        kept exactly as split.
        """
        if delimiter == "":
            raise ValueError("Delimiter must be a non-empty string")
        try:
            if isinstance(source, (str, os.PathLike)):
                with open(source, "r", encoding="utf-8") as f:
                    lines = read_lines(f)
            else:
                lines = read_lines(source)
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {source}: {e}") from e

        columns, rows = parse_lines(lines, delimiter)
        return cls(columns, rows)

    @classmethod
    def from_text(cls, text: str, delimiter: str = ",") -> "TableModel":
        return cls.load(io.StringIO(text), delimiter)

    # ---------- queries ----------
    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def dirty(self) -> bool:
        return self._dirty

    def row(self, index: int) -> tuple:
        if not 0 <= index < len(self._rows):
            raise IndexError(f"Row {index} out of range (rows: {len(self._rows)})")
        return tuple(self._rows[index])

    def iter_rows(self) -> Iterator[tuple]:
        for row in self._rows:
            yield tuple(row)

    def _check_index(self, row: int, column: int):
        if not 0 <= row < len(self._rows):
            raise IndexError(f"Row {row} out of range (rows: {len(self._rows)})")
        if not 0 <= column < len(self._columns):
            raise IndexError(
                f"Column {column} out of range (columns: {len(self._columns)})"
            )

    def get_cell(self, row: int, column: int) -> str:
        self._check_index(row, column)
        cells = self._rows[row]
        if column >= len(cells):
            return ""
        return cell_text(cells[column])

    # ---------- mutation ----------
    def append_empty_row(self) -> None:
        self._rows.append([""] * len(self._columns))
        self._changed(TableChange("insert", len(self._rows) - 1))

    def set_cell(self, row: int, column: int, value) -> None:
        self._check_index(row, column)
        cells = self._rows[row]
        if column >= len(cells):
            cells.extend([""] * (column + 1 - len(cells)))
        cells[column] = value
        self._changed(TableChange("update", row, column))

    # ---------- notification ----------
    def add_listener(self, callback: Callable[[TableChange], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[TableChange], None]) -> None:
        self._listeners.remove(callback)

    def _changed(self, change: TableChange) -> None:
        self._dirty = True
        for callback in list(self._listeners):
            callback(change)

    # ---------- serialization ----------
    def serialize(self, delimiter: str = ",", line_terminator: str = os.linesep) -> str:
        rows = ([cell_text(v) for v in row] for row in self._rows)
        return format_grid(self._columns, rows, delimiter, line_terminator)

    def save(self, destination, delimiter: str = ",", line_terminator: str = os.linesep) -> None:
        """Write the grid to a path or writable text stream, then mark it clean.

        OSError propagates and leaves the dirty flag as it was.
        """
        payload = self.serialize(delimiter, line_terminator) + line_terminator
        if isinstance(destination, (str, os.PathLike)):
            with open(destination, "w", encoding="utf-8", newline="") as f:
                f.write(payload)
        else:
            destination.write(payload)
        self._dirty = False

    def to_dataframe(self) -> pd.DataFrame:
        width = len(self._columns)
        data = []
        for row in self._rows:
            cells = [cell_text(v) for v in row[:width]]
            cells.extend([""] * (width - len(cells)))
            data.append(cells)
        return pd.DataFrame(data, columns=list(self._columns), dtype=object)
