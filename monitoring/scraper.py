"""
Reservation Page Scraper

Drives a headless Chrome through the two-week availability pages of the
reservation site and stops at the first page that has open slots.
Returns: a list of Slot records (empty when nothing is open).
"""

import time
import logging

from selenium import webdriver
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.chrome.options import Options
from webdriver_manager.chrome import ChromeDriverManager

from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import (
    NoSuchElementException,
    TimeoutException,
    WebDriverException,
)

from config.models import slot_dates
from config.settings import (
    BASE_URL,
    MAX_PAGES,
    NAVIGATION_RETRIES,
    WAIT_TIMEOUT,
    CHECK_TIMEOUT,
    PAGE_SETTLE_DELAY,
    TABLE_SELECTOR,
    STATUS_ICON_SELECTOR,
    NEXT_BUTTON_SELECTOR,
)
from monitoring.page_query import find_available_slots

logger = logging.getLogger(__name__)

# Console noise Chrome emits on this site on every load
IGNORED_CONSOLE_MARKERS = ("cookiePart", "unmarshal event")


class CheckError(Exception):
    """A check cycle could not complete."""


class PageLoadError(CheckError):
    """The reservation page did not load after all retries."""


class ElementNotFoundError(CheckError):
    """An element the page layout should contain is missing."""


class CheckTimeoutError(CheckError):
    """The check cycle ran past its deadline."""


def get_driver(headless=True):
    """
    Get a configured Chrome driver.
    """
    chrome_options = Options()

    if headless:
        chrome_options.add_argument("--headless=new")

    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--window-size=1920,1080")
    chrome_options.add_argument("--disable-web-security")
    chrome_options.add_argument("--disable-site-isolation-trials")
    chrome_options.add_argument(
        "--disable-features=SameSiteByDefaultCookies,CookiesWithoutSameSiteMustBeSecure"
    )

    # Enable logging
    chrome_options.set_capability("goog:loggingPrefs", {"browser": "ALL"})

    driver = webdriver.Chrome(
        service=Service(ChromeDriverManager().install()), options=chrome_options
    )
    driver.set_page_load_timeout(WAIT_TIMEOUT)
    return driver


def get_console_logs(driver):
    """
    Get browser console logs for debugging.
    """
    try:
        logs = driver.get_log("browser")
        return [log["message"] for log in logs]
    except Exception as e:
        logger.debug(f"Could not retrieve console logs: {e}")
        return []


def relay_browser_errors(driver):
    """
    Copy console messages that mention an error or failure into our log.

    Returns:
        list[str]: The messages that were logged
    """
    relayed = []
    for message in get_console_logs(driver):
        text = message.lower()
        if "error" not in text and "failed" not in text:
            continue
        if any(marker in message for marker in IGNORED_CONSOLE_MARKERS):
            continue
        logger.warning(f"🌐 {message}")
        relayed.append(message)
    return relayed


class SlotChecker:
    """
    Owns one browser session and checks the site for a single target.

    The driver is created on first use and reused across checks. After a
    failed check it is thrown away so the next check starts clean.
    """

    def __init__(
        self,
        target,
        max_pages=MAX_PAGES,
        driver_factory=get_driver,
        wait_timeout=WAIT_TIMEOUT,
        check_timeout=CHECK_TIMEOUT,
        navigation_retries=NAVIGATION_RETRIES,
        poll_frequency=0.5,
        sleep=time.sleep,
    ):
        self.target = target
        self.max_pages = max_pages
        self.driver_factory = driver_factory
        self.wait_timeout = wait_timeout
        self.check_timeout = check_timeout
        self.navigation_retries = navigation_retries
        self.poll_frequency = poll_frequency
        self.sleep = sleep
        self.driver = None

    def _get_driver(self):
        if self.driver is None:
            try:
                self.driver = self.driver_factory()
            except WebDriverException as e:
                raise CheckError(f"Could not start browser: {e}") from e
        return self.driver

    def close(self):
        """Quit the browser if one is running."""
        if self.driver is not None:
            try:
                self.driver.quit()
            except WebDriverException as e:
                logger.warning(f"Error closing browser: {e}")
            finally:
                self.driver = None

    def check_availability(self):
        """
        Run one check cycle.

        Returns:
            list[Slot]: Slots from the first page that has any, or []

        Raises:
            CheckError: Page did not load, the layout changed, or the
                cycle ran out of time
        """
        driver = self._get_driver()
        start_time = time.monotonic()
        deadline = start_time + self.check_timeout

        try:
            slots = self._check(driver, start_time, deadline)
        except CheckError:
            relay_browser_errors(driver)
            self.close()
            raise
        except WebDriverException as e:
            relay_browser_errors(driver)
            self.close()
            raise CheckError(f"Browser error: {e}") from e
        except Exception:
            relay_browser_errors(driver)
            self.close()
            raise

        relay_browser_errors(driver)
        return slots

    def _check(self, driver, start_time, deadline):
        self._load_page(driver, deadline)

        pages_checked = 0
        while pages_checked < self.max_pages:
            try:
                self._wait_visible(driver, TABLE_SELECTOR, deadline)
                self._wait_visible(driver, STATUS_ICON_SELECTOR, deadline)
            except TimeoutException as e:
                raise ElementNotFoundError(f"Failed to find elements: {e}") from e
            self.sleep(PAGE_SETTLE_DELAY)

            slots = self._query_page(driver)
            if slots:
                duration = time.monotonic() - start_time
                logger.info(
                    f"🎯 Found {len(slots)} slots: {', '.join(slot_dates(slots))} "
                    f"(checked {pages_checked + 1} pages in {duration:.1f}s)"
                )
                return slots

            if not self._next_page(driver, deadline):
                break
            pages_checked += 1

        duration = time.monotonic() - start_time
        logger.info(f"✓ No slots found (checked {pages_checked + 1} pages in {duration:.1f}s)")
        return []

    def _load_page(self, driver, deadline):
        last_error = None
        for attempt in range(self.navigation_retries):
            if attempt > 0:
                backoff = attempt * attempt
                logger.warning(
                    f"⚠️ Retry {attempt + 1}/{self.navigation_retries} "
                    f"(waiting {backoff} seconds)"
                )
                self.sleep(backoff)

            self._remaining(deadline)
            try:
                driver.get(BASE_URL)
                self._wait_visible(driver, TABLE_SELECTOR, deadline)
                return
            except WebDriverException as e:
                last_error = e
                logger.debug(f"Page load attempt {attempt + 1} failed: {e}")

        raise PageLoadError(
            f"❌ Failed to load page after {self.navigation_retries} retries: {last_error}"
        )

    def _query_page(self, driver):
        try:
            return find_available_slots(driver.page_source, self.target)
        except WebDriverException as e:
            logger.error(f"❌ Error checking slots: {e}")
            return []

    def _next_page(self, driver, deadline):
        """Click "2週後＞". Returns False when the button is disabled."""
        try:
            button = driver.find_element(By.CSS_SELECTOR, NEXT_BUTTON_SELECTOR)
            enabled = button.is_enabled()
        except NoSuchElementException as e:
            raise ElementNotFoundError(f"❌ Failed to check button: {e.msg}") from e

        if not enabled:
            return False

        try:
            button.click()
            self._wait_visible(driver, TABLE_SELECTOR, deadline)
        except WebDriverException as e:
            raise ElementNotFoundError(f"❌ Failed to click button: {e}") from e
        return True

    def _remaining(self, deadline):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise CheckTimeoutError(f"Check exceeded {self.check_timeout} seconds")
        return remaining

    def _wait_visible(self, driver, selector, deadline):
        timeout = min(self.wait_timeout, self._remaining(deadline))
        try:
            return WebDriverWait(driver, timeout, poll_frequency=self.poll_frequency).until(
                EC.visibility_of_element_located((By.CSS_SELECTOR, selector))
            )
        except TimeoutException:
            if time.monotonic() >= deadline:
                raise CheckTimeoutError(f"Check exceeded {self.check_timeout} seconds")
            raise
