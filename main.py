import sys

from _version import __version__
from config_paths import HISTORY_PATH, ensure_config_dirs, load_config
from history_manager import HistoryManager
from table_model import ParseError
from table_session import TableSession
from table_shell import TableShell

USAGE = (
    "tabled - delimited table editor\n\nUsage:\n"
    "  tabled [-d DELIM] path\n  tabled -v\n  tabled -h\n"
)


def _parse_args(args):
    """Return (delimiter or None, path or None); raises ValueError on bad usage."""
    delimiter = None
    path = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-d":
            if i + 1 >= len(args) or args[i + 1] == "":
                raise ValueError("-d requires a non-empty delimiter")
            delimiter = args[i + 1]
            i += 2
            continue
        if path is not None:
            raise ValueError(f"Unexpected argument: {arg}")
        path = arg
        i += 1
    return delimiter, path


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args:
        print(USAGE)
        return 0

    try:
        delimiter, path = _parse_args(args)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2
    if path is None:
        print(USAGE, file=sys.stderr)
        return 2

    cfg = load_config()
    try:
        session = TableSession.open(
            path,
            delimiter or cfg["DELIMITER"],
            cfg["LINE_TERMINATOR"],
            status_seconds=cfg["STATUS_SECONDS"],
        )
    except ParseError as e:
        print(f"Load failed: {e}", file=sys.stderr)
        return 1

    try:
        ensure_config_dirs()
    except OSError:
        history = None
    else:
        history = HistoryManager(HISTORY_PATH, max_items=cfg["HISTORY_SIZE"])
        history.load()

    TableShell(session, history_mgr=history).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
