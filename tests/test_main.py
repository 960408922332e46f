import pytest

import main


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda level=None: None)


def test_parse_args_modes_and_flags():
    args = main.parse_args(["test", "--no-notify", "--once", "--max-pages", "4"])

    assert args.modes == ["test"]
    assert args.no_notify and args.once
    assert args.max_pages == 4


def test_parse_args_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        main.parse_args(["prod"])


def test_missing_credentials_disable_notifications(monkeypatch):
    monkeypatch.delenv("LINE_CHANNEL_TOKEN", raising=False)
    monkeypatch.setenv("LINE_USER_ID", "U123")

    assert main.build_notifier(no_notify=False).no_notify is True


def test_credentials_present_keep_notifications_on(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_TOKEN", "token")
    monkeypatch.setenv("LINE_USER_ID", "U123")

    notifier = main.build_notifier(no_notify=False)

    assert notifier.no_notify is False
    assert notifier.channel_token == "token"


def test_notify_test_mode_exits_without_checking(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_TOKEN", "token")
    monkeypatch.setenv("LINE_USER_ID", "U123")

    def fail(*args, **kwargs):
        raise AssertionError("checker should not be created")

    monkeypatch.setattr(main, "SlotChecker", fail)

    assert main.main(["notify-test", "--no-notify"]) == 0


def test_once_returns_error_status_when_check_fails(monkeypatch):
    from monitoring.scraper import PageLoadError

    closed = []

    class BrokenChecker:
        def __init__(self, target, max_pages):
            self.target = target

        def check_availability(self):
            raise PageLoadError("site down")

        def close(self):
            closed.append(True)

    monkeypatch.setattr(main, "SlotChecker", BrokenChecker)

    assert main.main(["test", "--once", "--no-notify"]) == 1
    assert closed == [True]


def test_failed_startup_notification_disables_notifications(monkeypatch):
    from monitoring.notifier import LineNotifier, NotificationError

    class FailingNotifier(LineNotifier):
        def send_test_notification(self, location, category):
            raise NotificationError("Message failed with status: 401")

    notifier = FailingNotifier("token", "U123")
    started = []

    monkeypatch.setattr(main, "build_notifier", lambda no_notify: notifier)
    monkeypatch.setattr(main, "SlotChecker", lambda target, max_pages: "checker")
    monkeypatch.setattr(
        main.monitoring_daemon, "run",
        lambda checker, notifier: started.append((checker, notifier.no_notify)),
    )

    assert main.main([]) == 0
    assert started == [("checker", True)]
