"""
Tests for log formatters.
"""

import json
import sys
import logging

import pytest

from fetch_client.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    get_formatter,
)


def make_record(msg="Request completed", level=logging.INFO, **extra):
    record = logging.LogRecord("fetch_client", level, "test.py", 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "fetch_client"
        assert data["message"] == "Request completed"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields(self):
        record = make_record(method="GET", status_code=200)

        data = json.loads(JSONFormatter().format(record))

        assert data["method"] == "GET"
        assert data["status_code"] == 200
        assert "pathname" not in data

    def test_non_serializable_extra(self):
        record = make_record(payload=object())
        data = json.loads(JSONFormatter().format(record))
        assert data["payload"].startswith("<object")

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, "t.py", 1, "failed", (), sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_format(self):
        output = TextFormatter().format(make_record(method="GET", url="/users"))

        assert "[INFO] [fetch_client] Request completed" in output
        assert output.endswith("method=GET url=/users")

    def test_no_extra(self):
        output = TextFormatter().format(make_record())
        assert output.endswith("Request completed")


class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_colors_level(self):
        output = ColoredFormatter().format(make_record(level=logging.ERROR))
        assert "\033[31mERROR\033[0m" in output

    def test_record_not_modified(self):
        record = make_record(level=logging.WARNING)
        ColoredFormatter().format(record)
        assert record.levelname == "WARNING"


class TestGetFormatter:
    """Tests for get_formatter()."""

    @pytest.mark.parametrize("name, cls", [
        ("json", JSONFormatter),
        ("TEXT", TextFormatter),
        ("colored", ColoredFormatter),
    ])
    def test_known(self, name, cls):
        assert type(get_formatter(name)) is cls

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
