"""Tests for CancellationToken and PreparedRequest."""

import httpx
import pytest

from fetch_client.core.context import CancellationToken, PreparedRequest


class TestCancellationToken:
    """Test the single-shot cancellation flag."""

    def test_initial_state(self):
        token = CancellationToken()
        assert token.cancelled is False
        assert token.reason is None

    def test_cancel_runs_callbacks_once(self):
        token = CancellationToken()
        calls = []
        token.add_callback(lambda: calls.append(1))

        token.cancel("timeout")
        token.cancel("other")

        assert calls == [1]
        assert token.cancelled is True
        assert token.reason == "timeout"

    def test_removed_callback_not_called(self):
        token = CancellationToken()
        calls = []
        remove = token.add_callback(lambda: calls.append(1))

        remove()
        remove()
        token.cancel()

        assert calls == []

    def test_callback_after_cancel_runs_immediately(self):
        token = CancellationToken()
        token.cancel()
        calls = []

        token.add_callback(lambda: calls.append(1))

        assert calls == [1]

    def test_default_reason(self):
        token = CancellationToken()
        token.cancel()
        assert token.reason == "cancelled"


class TestPreparedRequest:
    """Test PreparedRequest."""

    def test_unique_request_ids(self):
        first = PreparedRequest(method="GET", url="https://api.example.com/")
        second = PreparedRequest(method="GET", url="https://api.example.com/")
        assert first.request_id != second.request_id

    @pytest.mark.asyncio
    async def test_to_httpx(self):
        prepared = PreparedRequest(
            method="POST",
            url="https://api.example.com/users?x=1",
            headers=httpx.Headers({"Content-Type": "application/json"}),
            content=b'{"a":1}',
        )

        async with httpx.AsyncClient() as client:
            request = prepared.to_httpx(client)

        assert request.method == "POST"
        assert str(request.url) == "https://api.example.com/users?x=1"
        assert request.headers["content-type"] == "application/json"
        assert request.content == b'{"a":1}'
