"""Log rendering: JSON lines carry the bound request context."""

import json
import logging

from jobly.logging_config import (
    bind_request_context,
    build_formatter,
    clear_request_context,
    configure_logging,
)


def _record(message: str, *args) -> logging.LogRecord:
    return logging.LogRecord("jobly.test", logging.INFO, __file__, 1, message, args, None)


def test_json_line_carries_trace_id():
    formatter = build_formatter(json_output=True)
    bind_request_context("trc_abc", method="GET", path=None)
    try:
        line = json.loads(formatter.format(_record("hello %s", "world")))
    finally:
        clear_request_context()

    assert line["event"] == "hello world"
    assert line["trace_id"] == "trc_abc"
    assert line["method"] == "GET"
    assert "path" not in line
    assert line["level"] == "info"
    assert line["logger"] == "jobly.test"


def test_cleared_context_is_not_rendered():
    formatter = build_formatter(json_output=True)
    bind_request_context("trc_old")
    clear_request_context()
    line = json.loads(formatter.format(_record("after")))
    assert "trace_id" not in line


def test_configure_logging_replaces_only_its_own_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("debug", json_output=True)
        configure_logging("warning", json_output=True)
        ours = [h for h in root.handlers if h.get_name() == "jobly"]
        assert len(ours) == 1
        assert root.level == logging.WARNING
        assert all(h in root.handlers for h in saved_handlers if h.get_name() != "jobly")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
