import time

from status_bar import render_status


def test_active_message_wins():
    ctx = {"status_msg": "Saved a.csv", "status_until": time.time() + 10}
    assert render_status(ctx, 20) == " Saved a.csv".ljust(20)


def test_expired_message_falls_back_to_summary():
    ctx = {
        "status_msg": "old",
        "status_until": time.time() - 1,
        "file_path": "/data/inv.csv",
        "row_count": 4,
        "column_count": 2,
        "visible_count": 4,
    }
    assert render_status(ctx, 80).rstrip() == " TABLE | inv.csv | 4x2 | no filter | 4 of 4 rows"


def test_truncates_to_width():
    ctx = {"file_path": None, "row_count": 1, "column_count": 1, "modified": True}
    line = render_status(ctx, 10)
    assert line == " TABLE | ["
