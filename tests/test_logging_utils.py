import logging

from loguru import logger

from rowpoly import logging_utils
from rowpoly.logging_utils import InterceptHandler, configure_logging, parse_log_filter


def test_parse_global_level() -> None:
    assert parse_log_filter("debug") == ("debug", {})


def test_parse_module_levels() -> None:
    level, modules = parse_log_filter("info, rowpoly.core=debug, rowpoly.core.rows=false")
    assert level == "info"
    assert modules == {"rowpoly.core": "DEBUG", "rowpoly.core.rows": False}


def test_parse_empty_falls_back_to_info() -> None:
    assert parse_log_filter("") == ("info", {})


def test_configure_is_idempotent(monkeypatch) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)
    calls: list[object] = []

    class _FakeLogger:
        def remove(self, *args) -> None:
            calls.append(args)

        def add(self, *args, **kwargs) -> None:
            calls.append(kwargs.get("filter"))

    monkeypatch.setattr(logging_utils, "logger", _FakeLogger())

    configure_logging(profile="default", log_filter="info,rowpoly.core=debug")
    configure_logging(profile="default", log_filter="info,rowpoly.core=debug")

    assert calls == [(), {"rowpoly.core": "DEBUG", "": "INFO"}]
    assert logging_utils._CONFIGURED == ("default", "info,rowpoly.core=debug")


def test_intercept_handler_forwards_to_loguru() -> None:
    messages: list[str] = []
    sink_id = logger.add(messages.append, format="{message}", level="INFO")
    try:
        record = logging.LogRecord("stdlib", logging.WARNING, __file__, 1, "from stdlib %s", ("logging",), None)
        InterceptHandler().emit(record)
    finally:
        logger.remove(sink_id)
    assert any("from stdlib logging" in m for m in messages)
