"""Structured Logging — tests for the JSON formatter."""

import json
import logging

from perspective.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "perspective.data.users", logging.INFO, __file__, 1, "Created user %s", ("abc",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "perspective.data.users"
    assert log["message"] == "Created user abc"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(user_id="abc", error_code="USER_NOT_FOUND", unrelated="x"),
    ))
    assert log["user_id"] == "abc"
    assert log["error_code"] == "USER_NOT_FOUND"
    assert "unrelated" not in log


def test_child_loggers_share_application_namespace():
    root = logging.getLogger("perspective")
    assert root.getChild("service.users").name == "perspective.service.users"
