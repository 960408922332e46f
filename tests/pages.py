"""
HTML snippets shaped like the reservation site's availability table.
"""

from datetime import timedelta

from utils.date_converter import tokyo_now

AVAILABLE = '<td class="tdSelect enable"><svg aria-label="予約可能"></svg></td>'
FULL = '<td class="tdSelect"><svg aria-label="空き無"></svg></td>'
OUT_OF_HOURS = '<td class="tdSelect"><svg aria-label="時間外"></svg></td>'
CLOSED = (
    '<td class="tdSelect enable"><svg aria-label="予約可能"></svg>'
    '<svg aria-label="休"></svg></td>'
)
CROSSED = (
    '<td class="tdSelect enable"><svg aria-label="予約可能"></svg>'
    '<svg aria-label="×"></svg></td>'
)
NOT_SELECTABLE = '<td class="enable"><svg aria-label="予約可能"></svg></td>'


def row(location, category, cells):
    return (
        f'<tr><th><a href="#">{location}</a></th>'
        f'<th class="main_color">{category}</th>{"".join(cells)}</tr>'
    )


def page(dates, rows, with_header=True):
    """
    Build a page whose header maps columns 2.. to the given dates.
    Columns 0 and 1 hold the location and category headers.
    """
    header_cells = "".join(f"<th>{d}<br>(水)</th>" for d in dates)
    header = (
        '<tr id="height_head"><th colspan="2">試験場</th><th>日付</th></tr>'
        f'<tr id="height_headday"><th></th><th></th>{header_cells}</tr>'
        if with_header else ""
    )
    return (
        "<html><body><form>"
        f'<table class="time--table"><tbody>{header}{"".join(rows)}</tbody></table>'
        '<input type="button" value="2週後＞">'
        "</form></body></html>"
    )


def future_date(days):
    """MM/DD text `days` days after now in Japan time."""
    return (tokyo_now() + timedelta(days=days)).strftime("%m/%d")
