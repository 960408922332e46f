"""
Availability Table Query

Parses a snapshot of the reservation page (driver.page_source) with
BeautifulSoup and returns the open slots for one location/category.
Kept free of any browser state so it can be run on saved HTML.
"""

import logging
from bs4 import BeautifulSoup

from config.models import Slot
from config.settings import (
    TABLE_SELECTOR,
    HEADER_ROW_ID,
    HEADER_ROW_IDS,
    AVAILABLE_LABEL,
    CLOSED_LABELS,
    SELECTABLE_CLASSES,
)
from utils.date_converter import extract_header_date, is_past_slot, tokyo_now

logger = logging.getLogger(__name__)


def build_date_map(header_row):
    """
    Map column index -> "MM/DD" using the date header row.

    Args:
        header_row (bs4.Tag): The <tr id="height_headday"> element

    Returns:
        dict: {column_index: "MM/DD"}
    """
    date_map = {}
    for index, cell in enumerate(header_row.find_all(["th", "td"], recursive=False)):
        date_text = extract_header_date(cell.get_text())
        if date_text:
            logger.debug(f"Column {index}: Date = {date_text}")
            date_map[index] = date_text
    return date_map


def _cell_text(row, selector):
    cell = row.select_one(selector)
    return cell.get_text().strip() if cell else ""


def _has_icon(cell, label):
    return cell.select_one(f'svg[aria-label="{label}"]') is not None


def _is_selectable(cell):
    classes = cell.get("class") or []
    return all(name in classes for name in SELECTABLE_CLASSES)


def find_available_slots(html_content, target, now=None):
    """
    Find bookable slots for the target in the availability table.

    A cell qualifies when it is selectable (tdSelect + enable), shows the
    "予約可能" icon, sits under a dated column, is not in the past and
    carries no closed mark ("休" / "×").

    Args:
        html_content (str): Page source containing table.time--table
        target (Target): Location/category filter
        now (datetime, optional): Reference time (default: now in Japan)

    Returns:
        list[Slot]: Slots in row then column order, empty if none
    """
    if now is None:
        now = tokyo_now()

    soup = BeautifulSoup(html_content, "html.parser")
    table = soup.select_one(TABLE_SELECTOR)
    if table is None:
        logger.warning("Availability table not found in page")
        return []

    header_row = table.find("tr", id=HEADER_ROW_ID)
    if header_row is None:
        logger.warning("Could not find header row")
        return []

    date_map = build_date_map(header_row)
    slots = []

    for row_index, row in enumerate(table.find_all("tr")):
        if row.get("id") in HEADER_ROW_IDS:
            continue

        location = _cell_text(row, "th a")
        if location != target.location:
            continue

        category = _cell_text(row, "th.main_color")
        if category != target.category:
            continue

        logger.debug(f"Processing row {row_index} for {location} - {category}")

        for cell_index, cell in enumerate(row.find_all(["th", "td"], recursive=False)):
            if not _is_selectable(cell):
                continue
            if not _has_icon(cell, AVAILABLE_LABEL):
                continue

            date_text = date_map.get(cell_index)
            if not date_text:
                logger.debug(f"Column {cell_index}: No date found in map")
                continue

            try:
                if is_past_slot(date_text, now):
                    logger.debug(f"Column {cell_index}: Skipping past date: {date_text}")
                    continue
            except ValueError as e:
                logger.warning(f"Column {cell_index}: {e}")
                continue

            if any(_has_icon(cell, label) for label in CLOSED_LABELS):
                logger.debug(f"Column {cell_index}: Skipping closed day: {date_text}")
                continue

            slots.append(Slot(location=location, category=category, date=date_text))

    return slots
