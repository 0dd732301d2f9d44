"""Structured Logging — tests for the JSON formatter."""

import json
import logging

from chickquita.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "chickquita.test", logging.WARNING, __file__, 1, "Flock not found", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_surfaces_extra_fields():
    payload = json.loads(JSONFormatter().format(_record(
        command="ArchiveFlockCommand", error_code="Error.NotFound", entity_id="abc",
    )))
    assert payload["message"] == "Flock not found"
    assert payload["level"] == "WARNING"
    assert payload["command"] == "ArchiveFlockCommand"
    assert payload["error_code"] == "Error.NotFound"
    assert payload["entity_id"] == "abc"


def test_json_formatter_omits_missing_extras():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "tenant_id" not in payload
    assert "exception" not in payload
