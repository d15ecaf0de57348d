"""Tests for the structlog rendering of stdlib log records."""

import json
import logging

from staffboard.logging_config import bind_request_context, build_formatter, clear_request_context


def _record(msg, **extra):
    record = logging.makeLogRecord(
        {"name": "staffboard.services.notifications.mutator", "levelno": logging.INFO, "levelname": "INFO", "msg": msg}
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_are_rendered():
    clear_request_context()
    line = build_formatter(json_output=True).format(
        _record("notification_marked_read", type="leave", source_id="leave_1", role="manager")
    )
    event = json.loads(line)
    assert event["event"] == "notification_marked_read"
    assert event["type"] == "leave"
    assert event["source_id"] == "leave_1"
    assert event["role"] == "manager"
    assert event["level"] == "info"


def test_request_context_is_merged():
    bind_request_context("trc_0123456789abcdef", user_id="mgr_1", role="manager")
    try:
        event = json.loads(build_formatter(json_output=True).format(_record("notifications_projected")))
    finally:
        clear_request_context()
    assert event["trace_id"] == "trc_0123456789abcdef"
    assert event["user_id"] == "mgr_1"
