"""
Monitoring Daemon

Background loop that checks the reservation site on a fixed interval,
sends a notification when slots appear and backs off after failures.
"""

import time
import signal
import logging
from datetime import datetime, timedelta

from config.settings import CHECK_INTERVAL, MAX_BACKOFF
from monitoring.notifier import NotificationError
from monitoring.scraper import CheckError

logger = logging.getLogger(__name__)

# Global flag for graceful shutdown
running = True


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    global running
    logger.info("Received shutdown signal. Stopping gracefully...")
    running = False


def compute_backoff(consecutive_errors, max_backoff=MAX_BACKOFF):
    """Quadratic backoff in seconds, capped at max_backoff."""
    return min(consecutive_errors * consecutive_errors, max_backoff)


def interruptible_sleep(seconds, sleep=time.sleep):
    """Sleep in one-second steps so a shutdown signal is noticed quickly."""
    remaining = seconds
    while remaining > 0 and running:
        step = min(1, remaining)
        sleep(step)
        remaining -= step


def notify_slots(notifier, slots):
    """Send the notification; failures are logged, never raised."""
    try:
        notifier.notify_available_slots(slots)
    except NotificationError as e:
        logger.error(f"Error sending notification: {e}")


def run_cycle(checker, notifier):
    """
    Run one check and notify if anything was found.

    Returns:
        list[Slot]: Slots found this cycle

    Raises:
        CheckError: The check itself failed
    """
    slots = checker.check_availability()
    if slots:
        notify_slots(notifier, slots)
    return slots


def run(checker, notifier, interval=CHECK_INTERVAL, max_backoff=MAX_BACKOFF,
        max_cycles=None, sleep=time.sleep, install_signal_handlers=True):
    """
    Main daemon loop.

    Args:
        checker (SlotChecker): Performs one check per cycle
        notifier (LineNotifier): Receives found slots
        interval (int): Seconds between successful checks
        max_backoff (int): Ceiling for the error backoff in seconds
        max_cycles (int, optional): Stop after this many cycles
        sleep (callable): Sleep function
        install_signal_handlers (bool): Register SIGINT/SIGTERM handlers

    Returns:
        int: Number of cycles run
    """
    global running
    running = True

    if install_signal_handlers:
        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Scraper started - press Ctrl+C to stop")

    cycle_count = 0
    consecutive_errors = 0

    try:
        while running:
            if max_cycles is not None and cycle_count >= max_cycles:
                break
            cycle_count += 1
            logger.info(f"=== Check Cycle #{cycle_count} ===")

            try:
                run_cycle(checker, notifier)
            except CheckError as e:
                consecutive_errors += 1
                logger.error(f"Error during check: {e}")
            except Exception as e:
                consecutive_errors += 1
                logger.error(f"Unexpected error in check cycle: {e}", exc_info=True)
            else:
                # Reset error counter on successful check
                consecutive_errors = 0

            if consecutive_errors:
                wait_time = compute_backoff(consecutive_errors, max_backoff)
                logger.info(
                    f"Waiting {wait_time} seconds before retry "
                    f"(consecutive errors: {consecutive_errors})"
                )
            else:
                wait_time = interval
                next_check = datetime.now() + timedelta(seconds=interval)
                logger.info(
                    f"✓ Check complete. Next check in {interval // 60} minutes "
                    f"at {next_check.strftime('%H:%M:%S')}"
                )

            if max_cycles is not None and cycle_count >= max_cycles:
                break
            interruptible_sleep(wait_time, sleep=sleep)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        checker.close()
        logger.info("Monitoring Daemon stopped")

    return cycle_count
