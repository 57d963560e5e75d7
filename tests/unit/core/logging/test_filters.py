"""
Tests for log filters and correlation id context.
"""

import asyncio
import logging

import pytest

from fetch_client.core.logging.filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    clear_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


def make_record(**extra):
    record = logging.LogRecord("test", logging.INFO, "test.py", 1, "msg", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationId:
    """Tests for the correlation id context variable."""

    def setup_method(self):
        clear_correlation_id()

    def test_set_and_get(self):
        set_correlation_id("req-1")
        assert get_correlation_id() == "req-1"

    def test_reset_restores_previous(self):
        outer = set_correlation_id("outer")
        inner = set_correlation_id("inner")

        reset_correlation_id(inner)
        assert get_correlation_id() == "outer"

        reset_correlation_id(outer)
        assert get_correlation_id() is None

    def test_clear(self):
        set_correlation_id("req-1")
        clear_correlation_id()
        assert get_correlation_id() is None

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        """Concurrent tasks see their own id."""
        async def worker(name):
            set_correlation_id(name)
            await asyncio.sleep(0)
            return get_correlation_id()

        results = await asyncio.gather(worker("a"), worker("b"))

        assert results == ["a", "b"]


class TestCorrelationIdFilter:
    """Tests for CorrelationIdFilter."""

    def setup_method(self):
        clear_correlation_id()

    def test_adds_id(self):
        set_correlation_id("req-42")
        record = make_record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "req-42"

    def test_no_id_outside_request(self):
        record = make_record()

        CorrelationIdFilter().filter(record)

        assert not hasattr(record, "correlation_id")


class TestExtraFieldsFilter:
    """Tests for ExtraFieldsFilter."""

    def test_adds_fields(self):
        record = make_record()

        ExtraFieldsFilter({"service": "billing"}).filter(record)

        assert record.service == "billing"

    def test_record_fields_win(self):
        record = make_record(service="orders")

        ExtraFieldsFilter({"service": "billing"}).filter(record)

        assert record.service == "orders"
