#!/usr/bin/env python3
"""
Page Snapshot Tool

Saves the reservation page HTML for offline inspection, or scans a saved
snapshot with the same query the monitor uses.

Usage:
    python scripts/inspect_page.py save [output.html]
    python scripts/inspect_page.py scan page.html [test]
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import BASE_URL, TABLE_SELECTOR, get_target
from monitoring.page_query import find_available_slots
from monitoring.scraper import get_driver

from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC


def save_page(output_path):
    driver = get_driver()
    try:
        driver.get(BASE_URL)
        WebDriverWait(driver, 30).until(
            EC.visibility_of_element_located((By.CSS_SELECTOR, TABLE_SELECTOR))
        )
        html_content = driver.page_source
    finally:
        driver.quit()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html_content, encoding="utf-8")
    print(f"Saved to {output_path}")


def scan_page(html_path, is_test_mode):
    target = get_target(is_test_mode)
    slots = find_available_slots(html_path.read_text(encoding="utf-8"), target)

    print(f"Target: {target.location} / {target.category}")
    if not slots:
        print("No available slots in snapshot")
    for slot in slots:
        print(f"  ✓ {slot.date}")


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in ("save", "scan"):
        print(__doc__)
        sys.exit(1)

    if sys.argv[1] == "save":
        output = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("html_examples") / "offer_list.html"
        save_page(output)
    else:
        if len(sys.argv) < 3:
            print(__doc__)
            sys.exit(1)
        scan_page(Path(sys.argv[2]), is_test_mode="test" in sys.argv[3:])


if __name__ == "__main__":
    main()
