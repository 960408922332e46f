from datetime import datetime

import pytest
import pytz

from config.models import Target


@pytest.fixture
def target():
    return Target(location="江東試験場", category="29の国･地域の方")


@pytest.fixture
def now():
    """Fixed reference time: 2025-07-20 10:00 in Japan."""
    return pytz.timezone("Asia/Tokyo").localize(datetime(2025, 7, 20, 10, 0))
