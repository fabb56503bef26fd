import logging
from pathlib import Path

from rpiforecast.logging_setup import LOG_FORMAT, configure_logging
from rpiforecast.settings.user import LoggingSettings


def test_defaults_to_console_at_info() -> None:
    configure_logging()

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert [type(h) for h in root.handlers] == [logging.StreamHandler]
    assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_debug_flag_overrides_level() -> None:
    configure_logging(LoggingSettings(level="ERROR"), debug=True)
    assert logging.getLogger().level == logging.DEBUG


def test_file_logging_creates_directory(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "forecast.log"
    configure_logging(
        LoggingSettings(log_to_file=True, log_to_console=False, file_path=log_file, level="WARNING")
    )

    logging.getLogger("rpiforecast.test").warning("disk full")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file.parent.is_dir()
    assert "[WARNING] rpiforecast.test: disk full" in log_file.read_text(encoding="utf-8")


def test_no_destinations_installs_null_handler() -> None:
    configure_logging(LoggingSettings(log_to_console=False))
    assert [type(h) for h in logging.getLogger().handlers] == [logging.NullHandler]
