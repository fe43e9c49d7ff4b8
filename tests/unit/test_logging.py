"""Unit tests for `storyline.logging` handler factories."""

import logging

from rich.logging import RichHandler

from storyline.logging import (
    LoggingSetup,
    ThirdPartyPrefixFilter,
    config_console_handler,
    config_flight_recorder,
    log_startup,
    storyline_environment,
)


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


def test_prefix_filter_marks_foreign_loggers():
    """Foreign loggers get a bracketed prefix; project loggers get none."""
    prefix_filter = ThirdPartyPrefixFilter()
    foreign = _record("shop_fixtures.grammars")
    own = _record("storyline.service_layer.runner")

    assert prefix_filter.filter(foreign)
    assert prefix_filter.filter(own)
    assert foreign.prefix == "[shop_fixtures]"
    assert own.prefix == ""


def test_console_handler_levels():
    """Debug mode forces DEBUG; otherwise the requested level is used."""
    assert config_console_handler(level=logging.ERROR).level == logging.ERROR
    handler = config_console_handler(level=logging.ERROR, debug_mode=True)

    assert isinstance(handler, RichHandler)
    assert handler.level == logging.DEBUG


def test_flight_recorder_flushes_on_warning(tmp_path):
    """Buffered records reach the file once a WARNING arrives."""
    path = tmp_path / "nested" / "latest.log"
    handler = config_flight_recorder(path, capacity=10)
    logger = logging.getLogger("storyline.tests.flight")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        logger.debug("quiet detail")
        assert not path.exists()

        logger.warning("something odd")
        text = path.read_text(encoding="utf-8")
        assert "quiet detail" in text
        assert "something odd" in text
    finally:
        logger.removeHandler(handler)
        handler.close()
        handler.target.close()


def test_storyline_environment_lists_only_own_variables(monkeypatch):
    monkeypatch.setenv("STORYLINE_WORKERS", "4")
    monkeypatch.setenv("STORYLINE_PROJECT", "shop/shop.proj")
    monkeypatch.setenv("OTHER_TOOL_WORKERS", "9")

    env = storyline_environment()

    assert env["STORYLINE_WORKERS"] == "4"
    assert "OTHER_TOOL_WORKERS" not in env
    assert list(env) == sorted(env)


def test_log_startup_reports_setup(tmp_path, caplog, monkeypatch):
    """The banner is INFO; overrides and environment go to DEBUG."""
    monkeypatch.setenv("STORYLINE_WORKSPACE", "checkout")
    recorder = config_flight_recorder(tmp_path / "latest.log", capacity=5)
    setup = LoggingSetup(
        console_level=logging.WARNING,
        handlers=(recorder,),
        log_path=tmp_path / "latest.log",
        flight_capacity=5,
        logger_levels={"storyline.adapters": logging.ERROR},
    )
    logger = logging.getLogger("storyline.tests.startup")

    with caplog.at_level(logging.DEBUG, logger="storyline.tests.startup"):
        log_startup(logger, "1.2.3", setup)
    recorder.close()

    assert setup.flight_recorder
    assert caplog.records[0].levelno == logging.INFO
    assert "storyline 1.2.3 (console WARNING, flight recorder on)" in caplog.text
    assert "Logger 'storyline.adapters' pinned at ERROR" in caplog.text
    assert "Environment: STORYLINE_WORKSPACE=checkout" in caplog.text


def test_logging_setup_without_recorder():
    setup = LoggingSetup(console_level=logging.INFO, handlers=())
    assert not setup.flight_recorder
