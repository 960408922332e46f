#!/usr/bin/env python3
"""
License Slot Monitor - Main Entry Point

Watches the Tokyo police reservation site for open appointment slots
and pushes a LINE message when one appears.

Usage:
    python main.py                 # real target, loop every 15 minutes
    python main.py test            # test target (usually has open slots)
    python main.py notify-test     # send a sample notification and exit
    python main.py --no-notify     # never call LINE
    python main.py test --once     # single check
"""

import argparse
import logging
import sys

from config.settings import MAX_PAGES, get_target, load_line_credentials
from monitoring.notifier import LineNotifier, NotificationError
from monitoring.scraper import CheckError, SlotChecker
from services import monitoring_daemon
from utils.log_setup import setup_logging

logger = logging.getLogger(__name__)

MODES = ("test", "notify-test")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Reservation Slot Monitor")
    parser.add_argument(
        "modes",
        nargs="*",
        metavar="mode",
        help="'test' checks the test target, 'notify-test' only sends a sample notification",
    )
    parser.add_argument("--no-notify", action="store_true", help="Disable LINE notifications")
    parser.add_argument("--once", action="store_true", help="Run a single check and exit")
    parser.add_argument("--max-pages", type=int, default=MAX_PAGES, help="Pages to check per cycle")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    for mode in args.modes:
        if mode not in MODES:
            parser.error(f"invalid mode '{mode}' (choose from {', '.join(MODES)})")
    if args.max_pages < 1:
        parser.error("--max-pages must be at least 1")
    return args


def build_notifier(no_notify):
    token, user_id = load_line_credentials()
    if not token or not user_id:
        logger.warning("⚠️ LINE credentials not set properly:")
        if not token:
            logger.warning("  - LINE_CHANNEL_TOKEN is missing")
        if not user_id:
            logger.warning("  - LINE_USER_ID is missing")
        logger.warning("Notifications will be disabled")
        no_notify = True
    else:
        logger.info(
            f"✓ LINE credentials found (token length: {len(token)}, "
            f"user ID length: {len(user_id)})"
        )
    return LineNotifier(token, user_id, no_notify=no_notify)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)

    is_test_mode = "test" in args.modes
    if args.no_notify:
        logger.info("Notifications disabled (--no-notify flag is set)")

    target = get_target(is_test_mode)
    mode = "TEST" if is_test_mode else "REAL"
    logger.info(
        f"Running in {mode} mode - Looking for slots at {target.location} for {target.category}"
    )

    notifier = build_notifier(args.no_notify)

    if "notify-test" in args.modes:
        try:
            notifier.send_test_notification(target.location, target.category)
        except NotificationError as e:
            logger.error(f"Notification test failed: {e}")
            return 1
        return 0

    checker = SlotChecker(target, max_pages=args.max_pages)

    if args.once:
        try:
            monitoring_daemon.run_cycle(checker, notifier)
        except CheckError as e:
            logger.error(f"Error during check: {e}")
            return 1
        finally:
            checker.close()
        return 0

    # Send initial test notification
    if not notifier.no_notify:
        try:
            notifier.send_test_notification(target.location, target.category)
            logger.info("✓ Initial test notification sent successfully")
        except NotificationError as e:
            logger.warning(f"⚠️ Initial test notification failed: {e}")
            logger.warning("⚠️ Notifications will be disabled")
            notifier.no_notify = True

    monitoring_daemon.run(checker, notifier)
    return 0


if __name__ == "__main__":
    sys.exit(main())
