"""Structured logging — JSON formatter output and handler setup."""

import json
import logging

from customer_registry.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "customer_registry.test", logging.INFO, __file__, 1, "Customer %s", ("created",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "customer_registry.test"
    assert log["message"] == "Customer created"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras():
    log = json.loads(JSONFormatter().format(
        _record(customer_id="c-1", operation="create", unrelated="x"),
    ))
    assert log["customer_id"] == "c-1"
    assert log["operation"] == "create"
    assert "unrelated" not in log


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "customer_registry"]
    assert len(ours) == 1
    assert logging.root.level == logging.WARNING
    logging.root.removeHandler(ours[0])
