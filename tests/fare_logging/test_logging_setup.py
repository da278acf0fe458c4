import json
import logging
import sys

import pytest

from fare_service.fare_logging import (
    ContextFilter,
    CorrelationFilter,
    DevFormatter,
    JSONFormatter,
    setup_logging,
    with_correlation,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg: str = "Quoted %s fare", args=("standard",), exc_info=None):
    return logging.LogRecord(
        name="fare_service.fare",
        level=logging.INFO,
        pathname="fare.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


@pytest.mark.unit
class TestJSONFormatter:
    def test_base_fields(self):
        output = json.loads(JSONFormatter("production").format(make_record()))

        assert output["level"] == "INFO"
        assert output["logger"] == "fare_service.fare"
        assert output["message"] == "Quoted standard fare"
        assert output["env"] == "production"
        assert "timestamp" in output

    def test_context_fields_included(self):
        record = make_record()
        record.correlation_id = "req-9"
        record.vehicle_type = "luxury"
        record.surge = "1.5"

        output = json.loads(JSONFormatter().format(record))

        assert output["correlation_id"] == "req-9"
        assert output["vehicle_type"] == "luxury"
        assert "surge" not in output

    def test_exception_included(self):
        try:
            raise ValueError("bad rate")
        except ValueError:
            record = make_record(exc_info=sys.exc_info())

        output = json.loads(JSONFormatter().format(record))

        assert "ValueError: bad rate" in output["exception"]


@pytest.mark.unit
class TestDevFormatter:
    def test_defaults_missing_correlation(self):
        line = DevFormatter().format(make_record())

        assert "[corr=-]" in line
        assert "fare_service.fare: Quoted standard fare" in line


@pytest.mark.unit
class TestSetupLogging:
    def test_installs_single_handler_with_filters(self):
        setup_logging(level="DEBUG")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

        handler = root.handlers[0]
        assert isinstance(handler.formatter, DevFormatter)
        filter_types = {type(f) for f in handler.filters}
        assert filter_types == {CorrelationFilter, ContextFilter}

    def test_json_output(self):
        setup_logging(level="info", json_output=True, environment="staging")

        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.formatter.environment == "staging"

    def test_correlation_reaches_output(self, capsys):
        setup_logging(json_output=True)

        with with_correlation("req-42"):
            logging.getLogger("fare_service.test").info("priced")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        assert json.loads(line)["correlation_id"] == "req-42"
