import os
import time
from typing import List, Optional

from filter_view import FilterView, InvalidPatternError
from status_bar import render_status
from table_model import TableModel


class TableSession:
    """Controller between a presentation shell and one loaded table.

    Tracks save enablement from the model's change notifications, owns the
    active filter, and turns core errors into status messages.
    """

    def __init__(
        self,
        model: TableModel,
        path: Optional[str] = None,
        delimiter: str = ",",
        line_terminator: str = os.linesep,
        status_seconds: float = 3,
    ):
        self.model = model
        self.path = path
        self.delimiter = delimiter
        self.line_terminator = line_terminator
        self.status_seconds = status_seconds
        self.view = FilterView(model)

        self.save_enabled = False
        self.status_msg = None
        self.status_msg_until = 0

        model.add_listener(self._on_table_changed)

    @classmethod
    def open(cls, path: str, delimiter: str = ",", line_terminator: str = os.linesep, **kwargs):
        model = TableModel.load(path, delimiter)
        return cls(model, path, delimiter, line_terminator, **kwargs)

    def _on_table_changed(self, _change):
        self.save_enabled = True

    # ---------------- status ----------------

    def set_status(self, msg, seconds=None):
        self.status_msg = msg
        self.status_msg_until = time.time() + (
            self.status_seconds if seconds is None else seconds
        )

    def current_status(self) -> Optional[str]:
        if self.status_msg and time.time() < self.status_msg_until:
            return self.status_msg
        return None

    def status_line(self, width: int) -> str:
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "file_path": self.path,
            "row_count": self.model.row_count,
            "column_count": self.model.column_count,
            "visible_count": self.view.row_count,
            "filter_pattern": self.view.pattern,
            "modified": self.save_enabled,
        }
        return render_status(context, width)

    # ---------------- filtering ----------------

    def update_filter(self, text: Optional[str]) -> bool:
        try:
            self.view.set_pattern(text)
        except InvalidPatternError as e:
            self.set_status(f"Invalid pattern: {e.reason}", 4)
            return False
        if self.view.active:
            self.set_status(f"Filter: {self.view.pattern}")
        else:
            self.set_status("Filter cleared")
        return True

    def visible_rows(self) -> List[int]:
        return self.view.visible_rows()

    # ---------------- editing ----------------

    def add_row(self) -> int:
        self.model.append_empty_row()
        row = self.model.row_count - 1
        if row in self.view.visible_rows():
            self.set_status(f"Added row {row}")
        else:
            self.set_status(f"Added row {row} (hidden by filter)")
        return row

    def cell(self, view_row: int, column: int) -> str:
        return self.model.get_cell(self.view.to_model_index(view_row), column)

    def edit_cell(self, view_row: int, column: int, value) -> bool:
        try:
            row = self.view.to_model_index(view_row)
            self.model.set_cell(row, column, value)
        except IndexError as e:
            self.set_status(f"Edit failed: {e}", 4)
            return False
        return True

    # ---------------- saving ----------------

    def save(self, path: Optional[str] = None) -> bool:
        target = path or self.path
        if not target:
            self.set_status("Path required", 3)
            return False
        try:
            self.model.save(target, self.delimiter, self.line_terminator)
        except OSError as e:
            self.set_status(f"Save failed: {e}", 4)
            return False
        self.path = target
        self.save_enabled = False
        self.set_status(f"Saved {os.path.basename(target)}")
        return True
