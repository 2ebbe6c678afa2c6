import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tabled")
HISTORY_PATH = os.path.join(CONFIG_DIR, "history.log")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
DELIMITER_DEFAULT = ","
LINE_TERMINATOR_DEFAULT = os.linesep
STATUS_SECONDS_DEFAULT = 3
HISTORY_SIZE_DEFAULT = 100

_LINE_TERMINATORS = {"\n", "\r\n", "\r"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)
    if not os.path.exists(HISTORY_PATH):
        try:
            with open(HISTORY_PATH, "w", encoding="utf-8") as f:
                f.write("")
        except OSError:
            pass


def load_config():
    cfg = {
        "DELIMITER": DELIMITER_DEFAULT,
        "LINE_TERMINATOR": LINE_TERMINATOR_DEFAULT,
        "STATUS_SECONDS": STATUS_SECONDS_DEFAULT,
        "HISTORY_SIZE": HISTORY_SIZE_DEFAULT,
    }

    if os.path.exists(CONFIG_JSON):
        try:
            import json

            with open(CONFIG_JSON, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return cfg

        if isinstance(data, dict):
            delim = data.get("delimiter")
            if isinstance(delim, str) and delim:
                cfg["DELIMITER"] = delim

            term = data.get("line_terminator")
            if term in _LINE_TERMINATORS:
                cfg["LINE_TERMINATOR"] = term

            seconds = data.get("status_seconds")
            if (
                isinstance(seconds, (int, float))
                and not isinstance(seconds, bool)
                and seconds > 0
            ):
                cfg["STATUS_SECONDS"] = seconds

            size = data.get("history_size")
            if isinstance(size, int) and not isinstance(size, bool) and size > 0:
                cfg["HISTORY_SIZE"] = size

    return cfg
