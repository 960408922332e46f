"""
Configuration Management

Handles application configuration and environment variables.
Values that operators tune can be overridden from the environment
(or a .env file next to the working directory).
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from config.models import Target

# Load environment variables from .env file
load_dotenv()

# ----------------- Reservation site -----------------

BASE_URL = "https://www.keishicho-gto.metro.tokyo.lg.jp/keishicho-u/reserve/offerList_detail?tempSeq=461"
SITE_TIMEZONE = "Asia/Tokyo"

# Real target
REAL_LOCATION = "府中試験場"
REAL_CATEGORY = "29の国･地域以外の方で、住民票のある方"

# Test target (known to have available slots)
TEST_LOCATION = "江東試験場"
TEST_CATEGORY = "29の国･地域の方"

# Page layout
TABLE_SELECTOR = "table.time--table"
HEADER_ROW_ID = "height_headday"
HEADER_ROW_IDS = ("height_head", "height_headday")
NEXT_BUTTON_SELECTOR = 'input[value="2週後＞"]'
STATUS_ICON_SELECTOR = (
    'svg[aria-label="予約可能"], svg[aria-label="空き無"], svg[aria-label="時間外"]'
)
AVAILABLE_LABEL = "予約可能"
CLOSED_LABELS = ("休", "×")
SELECTABLE_CLASSES = ("tdSelect", "enable")

# ----------------- Polling -----------------

MAX_PAGES = 12  # 12 clicks of "2週後" = 24 weeks ahead
NAVIGATION_RETRIES = 3
WAIT_TIMEOUT = 30  # seconds for a single element wait
PAGE_SETTLE_DELAY = 0.5
CHECK_TIMEOUT = int(os.getenv("CHECK_TIMEOUT_SECONDS", "300"))
CHECK_INTERVAL = int(os.getenv("CHECK_INTERVAL_SECONDS", str(15 * 60)))
MAX_BACKOFF = 5 * 60

# ----------------- LINE Messaging API -----------------

LINE_API_URL = "https://api.line.me/v2/bot/message/push"
LINE_REQUEST_TIMEOUT = 10

# ----------------- Logging -----------------

LOGS_DIR = Path(os.getenv("LOGS_DIR", "logs"))


def get_target(is_test_mode=False):
    """
    Get the location/category filter for the selected mode.

    Args:
        is_test_mode (bool): Use the test target that usually has open slots

    Returns:
        Target: The filter to search for
    """
    if is_test_mode:
        return Target(location=TEST_LOCATION, category=TEST_CATEGORY)
    return Target(location=REAL_LOCATION, category=REAL_CATEGORY)


def load_line_credentials():
    """
    Read the LINE channel token and recipient user ID from the environment.

    Returns:
        tuple: (channel_token, user_id), either may be an empty string
    """
    token = os.getenv("LINE_CHANNEL_TOKEN", "").strip()
    user_id = os.getenv("LINE_USER_ID", "").strip()
    return token, user_id
