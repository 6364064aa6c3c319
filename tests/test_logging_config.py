import json
import logging

from service.logging_config import JSONFormatter, configure_logging, correlation_id, get_correlation_id


def test_json_formatter_includes_correlation_id():
    correlation_id.set("cid-42")
    record = logging.LogRecord("service.predictor", logging.WARNING, __file__, 1, "request failed: %s", ("boom",), None)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "request failed: boom"
    assert entry["level"] == "WARNING"
    assert entry["correlation_id"] == "cid-42"


def test_get_correlation_id_generates_once():
    correlation_id.set("")
    cid = get_correlation_id()
    assert len(cid) == 12
    assert get_correlation_id() == cid


def test_configure_logging_text_format():
    configure_logging(level="debug", fmt="text")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, JSONFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING
