"""JSON log formatting: context enrichment and secret redaction."""

import json
import logging

import pytest

from divelog.context import clear_context, request_id_var
from divelog.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="divelog",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="user created",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_with_extras():
    payload = json.loads(JSONFormatter().format(_record(target_id="abc")))
    assert payload["message"] == "user created"
    assert payload["level"] == "INFO"
    assert payload["target_id"] == "abc"


def test_sensitive_keys_dropped():
    payload = json.loads(
        JSONFormatter().format(_record(password="hunter2", token="t", user_id="u"))
    )
    assert "password" not in payload
    assert "token" not in payload
    assert payload["user_id"] == "u"


def test_request_context_included():
    request_id_var.set("req-42")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()
    assert payload["request_id"] == "req-42"
