from datetime import datetime

import pytest

from utils.date_converter import extract_header_date, is_past_slot, resolve_slot_date


def test_extract_header_date():
    assert extract_header_date("07/30\n(水)") == "07/30"
    assert extract_header_date("  08/01 (Fri) ") == "08/01"
    assert extract_header_date("日付") is None
    assert extract_header_date("") is None


def test_resolve_uses_current_year(now):
    resolved = resolve_slot_date("07/30", now)

    assert (resolved.year, resolved.month, resolved.day, resolved.hour) == (2025, 7, 30, 0)
    assert resolved.tzinfo is not None


def test_resolve_wraps_to_next_year(now):
    resolved = resolve_slot_date("01/10", now.replace(month=12, day=1))

    assert resolved.year == 2026


def test_is_past_slot(now):
    assert is_past_slot("07/19", now)
    assert is_past_slot("07/20", now)
    assert not is_past_slot("07/21", now)


def test_naive_reference_time_is_treated_as_japan_time():
    assert not is_past_slot("07/21", datetime(2025, 7, 20, 23, 59))
    assert is_past_slot("07/20", datetime(2025, 7, 20, 0, 1))


@pytest.mark.parametrize("text", ["7/3", "13/40", "02/30", None])
def test_invalid_dates_raise(text, now):
    with pytest.raises(ValueError):
        resolve_slot_date(text, now)
