"""
Pytest configuration and fixtures for fetch-client-core tests.
"""

from typing import Callable, List, Union

import httpx
import pytest
import respx

from fetch_client import FetchClient
from fetch_client.core.logging.config import LoggingConfig

Handler = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class RecordingTransport(httpx.MockTransport):
    """
    MockTransport that records every request and replies from a queue.

    Each queued item is either an httpx.Response or a callable taking the
    request. The last item is reused once the queue is exhausted.
    """

    def __init__(self, *responses: Handler):
        self.requests: List[httpx.Request] = []
        self._responses = list(responses) or [httpx.Response(200, json={})]
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if callable(item):
            return item(request)
        # Fresh copy: a reused item must not hand out an already closed response
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def transport():
    """Recording mock transport (replies {} by default)."""
    return RecordingTransport()


@pytest.fixture
def client(base_url, transport):
    """FetchClient over the recording transport."""
    return FetchClient(base_url=base_url, transport=transport)


@pytest.fixture
def mock_api(base_url):
    """respx router bound to base_url."""
    with respx.mock(base_url=base_url, assert_all_called=False) as router:
        yield router


@pytest.fixture
def logging_config():
    """Console-less logging configuration at DEBUG level."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=False,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """LoggingConfig writing JSON lines into a temporary file."""
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(tmp_path / "fetch.log")
    )


@pytest.fixture
def make_client(base_url):
    """Factory: FetchClient over a RecordingTransport with queued responses."""
    def factory(*responses: Handler, **kwargs):
        transport = RecordingTransport(*responses)
        kwargs.setdefault("base_url", base_url)
        return FetchClient(transport=transport, **kwargs), transport

    return factory
