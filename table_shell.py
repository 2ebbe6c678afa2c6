import shlex
import sys

HELP_LINES = [
    "show                      print the visible rows",
    "filter [pattern]          show rows with a cell matching the regex; no pattern clears",
    "add                       append an empty row",
    "set <row> <col> <value>   edit a cell (row as shown by 'show')",
    "get <row> <col>           print a cell",
    "save [path]               write the table",
    "status                    print the status line",
    "history                   print previous commands",
    "quit | quit!              exit (quit! discards unsaved changes)",
]


class TableShell:
    MAX_COL_WIDTH = 40
    STATUS_WIDTH = 80

    def __init__(self, session, stdin=None, stdout=None, history_mgr=None):
        self.session = session
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.history_mgr = history_mgr
        self.exit_requested = False

    def _write(self, text=""):
        self.stdout.write(text + "\n")

    def _report(self):
        msg = self.session.current_status()
        if msg:
            self._write(msg)

    # ---------------- rendering ----------------

    def _col_widths(self, rows):
        model = self.session.model
        widths = []
        for c, name in enumerate(model.columns):
            max_len = len(name)
            for r in rows:
                max_len = max(max_len, len(model.get_cell(r, c)))
            widths.append(min(self.MAX_COL_WIDTH, max_len))
        return widths

    @staticmethod
    def _fit(text, width):
        return text[:width].ljust(width)

    def render_table(self):
        model = self.session.model
        rows = self.session.visible_rows()
        widths = self._col_widths(rows)
        row_w = max(3, len(str(len(rows))) + 1)

        header = " " * row_w + " ".join(
            self._fit(name, w) for name, w in zip(model.columns, widths)
        )
        lines = [header.rstrip()]
        for view_idx, r in enumerate(rows):
            cells = " ".join(
                self._fit(model.get_cell(r, c), w) for c, w in enumerate(widths)
            )
            lines.append((str(view_idx).rjust(row_w - 1) + " " + cells).rstrip())
        return lines

    # ---------------- commands ----------------

    def _resolve_column(self, token):
        columns = self.session.model.columns
        if token in columns:
            return columns.index(token)
        try:
            return int(token)
        except ValueError:
            raise IndexError(f"Unknown column: {token}") from None

    def execute(self, line):
        """Run one command line. Returns True when the command succeeded."""
        line = line.strip()
        if not line:
            return True
        name, _, rest = line.partition(" ")

        if name == "filter":
            # raw remainder: regex text must not go through shlex
            return self.session.update_filter(rest.strip())

        try:
            args = shlex.split(rest)
        except ValueError as e:
            self.session.set_status(f"Bad arguments: {e}", 4)
            return False

        if name == "show":
            for text in self.render_table():
                self._write(text)
            return True

        if name == "add":
            self.session.add_row()
            return True

        if name == "set":
            if len(args) < 3:
                self.session.set_status("Usage: set <row> <col> <value>", 4)
                return False
            try:
                row = int(args[0])
                col = self._resolve_column(args[1])
            except (ValueError, IndexError) as e:
                self.session.set_status(f"Edit failed: {e}", 4)
                return False
            return self.session.edit_cell(row, col, " ".join(args[2:]))

        if name == "get":
            if len(args) != 2:
                self.session.set_status("Usage: get <row> <col>", 4)
                return False
            try:
                value = self.session.cell(int(args[0]), self._resolve_column(args[1]))
            except (ValueError, IndexError) as e:
                self.session.set_status(f"Lookup failed: {e}", 4)
                return False
            self._write(value)
            return True

        if name == "save":
            return self.session.save(args[0] if args else None)

        if name == "status":
            self._write(self.session.status_line(self.STATUS_WIDTH).rstrip())
            return True

        if name == "history":
            if self.history_mgr is None:
                self.session.set_status("History unavailable", 3)
                return False
            for entry in self.history_mgr.items:
                self._write(entry)
            return True

        if name == "help":
            for text in HELP_LINES:
                self._write(text)
            return True

        if name in ("quit", "q"):
            if self.session.save_enabled:
                self.session.set_status("Unsaved changes; save or use quit!", 4)
                return False
            self.exit_requested = True
            return True

        if name == "quit!":
            self.exit_requested = True
            return True

        self.session.set_status(f"Unknown command: {name}", 3)
        return False

    def run(self):
        for raw in self.stdin:
            line = raw.rstrip("\n")
            ok = self.execute(line)
            self._report()
            # clear so a message is printed once
            self.session.status_msg = None
            if ok and line.strip() and self.history_mgr is not None:
                self.history_mgr.append(line.strip())
                self.history_mgr.persist(line.strip())
            if self.exit_requested:
                break
