import logging

from taskapi.app.core.logging_config import FieldFormatter, store_event


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("taskapi.test", logging.ERROR, __file__, 1, "boom", None, None)
    record.__dict__.update(extra)
    return record


def test_store_event_fields():
    assert store_event("insert") == {"op": "insert", "task_id": "-"}
    assert store_event("get_by_id", 7) == {"op": "get_by_id", "task_id": 7}


def test_formatter_renders_store_fields_only():
    fmt = FieldFormatter("%(levelname)s %(fields)s%(message)s")
    line = fmt.format(_record(**store_event("delete_by_id", 3)))
    assert line == "ERROR op=delete_by_id task_id=3 boom"


def test_formatter_renders_request_fields_with_placeholders():
    fmt = FieldFormatter("%(fields)s%(message)s")
    line = fmt.format(_record(method="GET", path="/tasks", status=200))
    assert line == "method=GET path=/tasks status=200 elapsed_ms=- boom"


def test_formatter_plain_record_has_no_fields():
    fmt = FieldFormatter("%(levelname)s %(fields)s%(message)s")
    assert fmt.format(_record()) == "ERROR boom"
