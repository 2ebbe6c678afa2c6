import re
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from table_model import cell_text


class InvalidPatternError(ValueError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


@dataclass(frozen=True)
class CompiledFilter:
    pattern: str
    regex: re.Pattern

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


def compile_filter(pattern: Optional[str]) -> Optional[CompiledFilter]:
    """Compile user text into a row filter. None means "show every row"."""
    if not pattern:
        return None
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
    return CompiledFilter(pattern, regex)


def apply_filter(model, compiled: Optional[CompiledFilter]) -> List[int]:
    """Indices of rows with at least one cell matching, in model order."""
    if compiled is None:
        return list(range(model.row_count))

    # one record per stored cell; ragged rows are searched on their own cells only
    records = [
        (r, cell_text(v)) for r, row in enumerate(model.iter_rows()) for v in row
    ]
    if not records:
        return []

    frame = pd.DataFrame(records, columns=["row", "text"])
    hits = frame["text"].map(compiled.matches).astype(bool)
    matched = hits.groupby(frame["row"]).any()
    return [int(r) for r in matched.index[matched.to_numpy(dtype=bool)]]


class FilterView:
    """Active filter for one model; visible rows are recomputed on every call."""

    def __init__(self, model):
        self.model = model
        self._filter: Optional[CompiledFilter] = None

    @property
    def pattern(self) -> str:
        return self._filter.pattern if self._filter else ""

    @property
    def active(self) -> bool:
        return self._filter is not None

    def set_pattern(self, text: Optional[str]) -> None:
        # compile first so a bad pattern leaves the current filter in place
        compiled = compile_filter(text)
        self._filter = compiled

    def clear(self) -> None:
        self._filter = None

    def visible_rows(self) -> List[int]:
        return apply_filter(self.model, self._filter)

    @property
    def row_count(self) -> int:
        return len(self.visible_rows())

    def to_model_index(self, view_index: int) -> int:
        rows = self.visible_rows()
        if not 0 <= view_index < len(rows):
            raise IndexError(f"Row {view_index} not visible (visible rows: {len(rows)})")
        return rows[view_index]
