"""Tests for TransportExecutor deadlines and cancellation."""

import asyncio

import httpx
import pytest

from fetch_client.core.context import CancellationToken, PreparedRequest
from fetch_client.core.exceptions import TimeoutError
from fetch_client.core.transport import TransportExecutor


@pytest.fixture
def timers(monkeypatch):
    """Record every TimerHandle scheduled through loop.call_later."""
    handles = []

    def install():
        loop = asyncio.get_running_loop()
        original = loop.call_later

        def call_later(*args, **kwargs):
            handle = original(*args, **kwargs)
            handles.append(handle)
            return handle

        monkeypatch.setattr(loop, "call_later", call_later)
        return handles

    return install


def prepared(url="https://api.example.com/ping"):
    return PreparedRequest(method="GET", url=url)


class TestExecute:
    """Test a single send under deadline."""

    @pytest.mark.asyncio
    async def test_returns_response(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))

        async with httpx.AsyncClient(transport=transport) as client:
            response = await TransportExecutor().execute(client, prepared(), 1000)
            await response.aread()

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_timeout_raises_408(self):
        cancelled = []

        async def slow(request):
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(slow)) as client:
            with pytest.raises(TimeoutError) as exc_info:
                await TransportExecutor().execute(client, prepared(), 50)

        assert exc_info.value.status_code == 408
        assert str(exc_info.value) == "Request timeout after 50ms"
        assert exc_info.value.url == "https://api.example.com/ping"
        assert cancelled == [True]

    @pytest.mark.asyncio
    async def test_timer_cleared_on_success(self, timers):
        handles = timers()
        transport = httpx.MockTransport(lambda request: httpx.Response(200))

        async with httpx.AsyncClient(transport=transport) as client:
            await TransportExecutor().execute(client, prepared(), 10_000)

        assert handles
        assert all(handle.cancelled() for handle in handles)

    @pytest.mark.asyncio
    async def test_timer_cleared_on_transport_error(self, timers):
        handles = timers()

        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(httpx.ConnectError):
                await TransportExecutor().execute(client, prepared(), 10_000)

        assert handles
        assert all(handle.cancelled() for handle in handles)

    @pytest.mark.asyncio
    async def test_token_cancel_with_other_reason(self):
        """External cancellation propagates as CancelledError."""
        token = CancellationToken()

        async def slow(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(slow)) as client:
            asyncio.get_running_loop().call_later(0.01, token.cancel, "shutdown")
            with pytest.raises(asyncio.CancelledError):
                await TransportExecutor().execute(client, prepared(), 10_000, token)

    @pytest.mark.asyncio
    async def test_token_callback_removed_after_success(self):
        """Late cancellation of the token does not touch a finished request."""
        token = CancellationToken()
        transport = httpx.MockTransport(lambda request: httpx.Response(200))

        async with httpx.AsyncClient(transport=transport) as client:
            response = await TransportExecutor().execute(client, prepared(), 10_000, token)

        token.cancel("late")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_httpx_timeout_mapped(self):
        def read_timeout(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(read_timeout)) as client:
            with pytest.raises(TimeoutError) as exc_info:
                await TransportExecutor().execute(client, prepared(), 2000)

        assert exc_info.value.status_code == 408
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
