from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from liftlog.logging import (
    ContextTextFormatter,
    JSONFormatter,
    log_extra,
    record_context,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="liftlog.pipeline",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="projected %d events",
        args=(3,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    before, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)


def test_log_extra_prefixes_keys() -> None:
    assert log_extra(event_type="chat.message", event_id=None) == {
        "liftlog_event_type": "chat.message",
        "liftlog_event_id": None,
    }


def test_record_context_strips_prefix_and_ignores_other_attributes() -> None:
    record = _record(**log_extra(event_count=3), unrelated="ignored")
    assert record_context(record) == {"event_count": 3}


def test_json_formatter_emits_single_line_json() -> None:
    line = JSONFormatter().format(_record())
    assert "\n" not in line
    payload = json.loads(line)
    assert payload["level"] == "INFO"
    assert payload["logger"] == "liftlog.pipeline"
    assert payload["message"] == "projected 3 events"
    assert "timestamp" in payload
    assert "context" not in payload


def test_json_formatter_nests_context() -> None:
    payload = json.loads(JSONFormatter().format(_record(**log_extra(event_count=3))))
    assert payload["context"] == {"event_count": 3}


def test_json_formatter_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_text_formatter_appends_context() -> None:
    line = ContextTextFormatter().format(_record(**log_extra(event_type="chat.message")))
    assert "INFO liftlog.pipeline: projected 3 events" in line
    assert line.endswith("[event_type='chat.message']")


def test_text_formatter_without_context() -> None:
    assert ContextTextFormatter().format(_record()).endswith("projected 3 events")


def test_setup_logging_json_writes_to_stream(restore_root_logger: logging.Logger) -> None:
    stream = io.StringIO()
    handler = setup_logging("json", logging.DEBUG, stream=stream)
    assert restore_root_logger.level == logging.DEBUG
    assert restore_root_logger.handlers == [handler]

    logging.getLogger("liftlog.test").debug("hello", extra=log_extra(event_id="evt-1"))
    payload = json.loads(stream.getvalue())
    assert payload["message"] == "hello"
    assert payload["context"] == {"event_id": "evt-1"}


def test_setup_logging_text_replaces_handlers(restore_root_logger: logging.Logger) -> None:
    setup_logging("json", stream=io.StringIO())
    handler = setup_logging("text", logging.WARNING, stream=io.StringIO())
    assert restore_root_logger.handlers == [handler]
    assert isinstance(handler.formatter, ContextTextFormatter)
    assert handler.level == logging.WARNING
