"""
Logging Setup

Console output plus an append-only log file per day (logs/YYYY-MM-DD.log).
"""

import logging
import os
from datetime import datetime
from pathlib import Path

from config.settings import LOGS_DIR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class DailyFileHandler(logging.FileHandler):
    """
    File handler that writes to logs_dir/<today>.log and moves to a new
    file on the first record emitted after midnight.
    """

    def __init__(self, logs_dir, encoding="utf-8"):
        self.logs_dir = Path(logs_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.current_day = self._today()
        super().__init__(self._path_for(self.current_day), mode="a", encoding=encoding)

    @staticmethod
    def _today():
        return datetime.now().strftime("%Y-%m-%d")

    def _path_for(self, day):
        return str(self.logs_dir / f"{day}.log")

    def emit(self, record):
        today = self._today()
        if today != self.current_day:
            self.acquire()
            try:
                self.close()
                self.current_day = today
                self.baseFilename = os.path.abspath(self._path_for(today))
                self.stream = None
                super().emit(logging.makeLogRecord({
                    "name": __name__,
                    "levelno": logging.INFO,
                    "levelname": "INFO",
                    "msg": "=== Log rotated to new file ===",
                }))
            finally:
                self.release()
        super().emit(record)


def setup_logging(level=logging.INFO, logs_dir=None):
    """
    Configure the root logger for the monitor.

    Args:
        level (int): Minimum level for both handlers
        logs_dir (str or Path, optional): Directory for daily files (default: LOGS_DIR)
    """
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    file_handler = DailyFileHandler(logs_dir or LOGS_DIR)
    file_handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[stream_handler, file_handler], force=True)

    # Selenium and urllib3 are chatty at INFO
    logging.getLogger("selenium").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("WDM").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("=== Starting new session ===")
