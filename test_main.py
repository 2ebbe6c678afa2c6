import io

import pytest

import main
from main import _parse_args


@pytest.mark.parametrize(
    "args, expected",
    [
        (["inv.csv"], (None, "inv.csv")),
        (["-d", ";", "inv.csv"], (";", "inv.csv")),
        (["inv.csv", "-d", "\t"], ("\t", "inv.csv")),
        ([], (None, None)),
    ],
)
def test_parse_args(args, expected):
    assert _parse_args(args) == expected


@pytest.mark.parametrize("args", [["-d"], ["-d", "", "x.csv"], ["a.csv", "b.csv"]])
def test_parse_args_rejects_bad_usage(args):
    with pytest.raises(ValueError):
        _parse_args(args)


def test_version_flag(capsys):
    assert main.main(["-v"]) == 0
    assert capsys.readouterr().out.strip() == main.__version__


def test_missing_file_reports_load_failure(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(main, "load_config", lambda: {
        "DELIMITER": ",", "LINE_TERMINATOR": "\n", "STATUS_SECONDS": 3, "HISTORY_SIZE": 5,
    })
    assert main.main([str(tmp_path / "missing.csv")]) == 1
    assert "Load failed" in capsys.readouterr().err


def test_runs_shell_over_stdin(tmp_path, capsys, monkeypatch):
    path = tmp_path / "inv.csv"
    path.write_text("name;qty\nwidget;5\n", encoding="utf-8")
    monkeypatch.setattr(main, "load_config", lambda: {
        "DELIMITER": ",", "LINE_TERMINATOR": "\n", "STATUS_SECONDS": 3, "HISTORY_SIZE": 5,
    })
    monkeypatch.setattr(main, "HISTORY_PATH", str(tmp_path / "history.log"))
    monkeypatch.setattr(main, "ensure_config_dirs", lambda: None)
    monkeypatch.setattr("sys.stdin", io.StringIO("set 0 qty 6\nsave\nquit\n"))

    assert main.main(["-d", ";", str(path)]) == 0
    assert path.read_text(encoding="utf-8") == "name;qty\nwidget;6\n"
    assert "Saved inv.csv" in capsys.readouterr().out
    assert (tmp_path / "history.log").read_text(encoding="utf-8") == "set 0 qty 6\nsave\nquit\n"
