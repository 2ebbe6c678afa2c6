import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, file_path, row_count, column_count,
                   visible_count, filter_pattern, modified
    """
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        fname = context.get("file_path") or "[no file]"
        fname = os.path.basename(fname) or fname
        rows = context.get("row_count", 0)
        cols = context.get("column_count", 0)
        visible = context.get("visible_count", rows)
        pattern = context.get("filter_pattern") or ""
        filt = f"filter /{pattern}/" if pattern else "no filter"
        text = f" TABLE | {fname} | {rows}x{cols} | {filt} | {visible} of {rows} rows"
        if context.get("modified"):
            text += " | modified"

    return text.ljust(width)[:width]
