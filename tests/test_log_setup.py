import logging

from utils.log_setup import DailyFileHandler


def _record(message):
    return logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)


def test_daily_file_handler_appends_and_rolls_over(tmp_path):
    first_file = tmp_path / f"{DailyFileHandler._today()}.log"
    first_file.write_text("earlier run\n", encoding="utf-8")

    handler = DailyFileHandler(tmp_path)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.emit(_record("first"))
    handler._today = lambda: "2099-01-01"
    handler.emit(_record("second"))
    handler.close()

    assert first_file.read_text(encoding="utf-8") == "earlier run\nfirst\n"
    assert (tmp_path / "2099-01-01.log").read_text(encoding="utf-8") == (
        "=== Log rotated to new file ===\nsecond\n"
    )
