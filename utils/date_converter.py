"""
Date Conversion Utility

Converts the "MM/DD" header text used by the reservation table
(e.g. "07/30\n(水)") into timezone-aware datetimes in Japan time,
so slots that already passed can be filtered out.
"""

import re
from datetime import datetime
import pytz

from config.settings import SITE_TIMEZONE

HEADER_DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})")


def tokyo_now(timezone=SITE_TIMEZONE):
    """
    Get current time in the reservation site's time zone.

    Returns:
        datetime: Current aware time
    """
    return datetime.now(pytz.timezone(timezone))


def _in_zone(now, tz):
    # Naive datetimes are taken to already be in site time
    if now.tzinfo is None:
        return tz.localize(now)
    return now.astimezone(tz)


def extract_header_date(text):
    """
    Pull the "MM/DD" part out of a header cell's text.

    Args:
        text (str): Cell text, possibly multi-line ("07/30\n(水)")

    Returns:
        str or None: "MM/DD" if the text contains a date
    """
    if not text:
        return None
    match = HEADER_DATE_PATTERN.search(text.strip())
    return match.group(0) if match else None


def resolve_slot_date(date_text, now, timezone=SITE_TIMEZONE):
    """
    Convert a "MM/DD" display date into midnight of that day.

    The table never shows a year. Months earlier than the current month
    belong to next year (the table wraps past December).

    Args:
        date_text (str): Date in "MM/DD" format (extra text is ignored)
        now (datetime): Reference time, aware or naive in site time
        timezone (str): Timezone string (default: 'Asia/Tokyo')

    Returns:
        datetime: Aware datetime at midnight of the slot day

    Raises:
        ValueError: If date_text does not contain a valid "MM/DD" date
    """
    match = HEADER_DATE_PATTERN.search(date_text or "")
    if not match:
        raise ValueError(f"Invalid date format '{date_text}'. Expected MM/DD")

    tz = pytz.timezone(timezone)
    now = _in_zone(now, tz)

    month = int(match.group(1))
    day = int(match.group(2))
    year = now.year + 1 if month < now.month else now.year

    try:
        return tz.localize(datetime(year, month, day))
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_text}'") from e


def is_past_slot(date_text, now, timezone=SITE_TIMEZONE):
    """
    Check whether a slot date is already behind the reference time.

    A slot dated today counts as past once the day has started.
    """
    now = _in_zone(now, pytz.timezone(timezone))
    return resolve_slot_date(date_text, now, timezone) < now
