"""Tests for the exception hierarchy."""

import pytest

from fetch_client.core.exceptions import (
    ConfigurationError,
    FetchClientException,
    HttpError,
    HttpStatusError,
    InvalidResponseError,
    LogoutError,
    ServerRejectedError,
    TimeoutError,
    TransportError,
)


class TestHttpError:
    """Test the base request error."""

    def test_fields(self):
        payload = {"code": 500, "message": "boom"}
        error = HttpError("boom", code=500, response=payload, status_code=200)

        assert str(error) == "boom"
        assert error.message == "boom"
        assert error.code == 500
        assert error.response is payload
        assert error.status_code == 200
        assert error.is_logout is False
        assert error.kind == "generic"

    def test_fields_are_read_only(self):
        error = HttpError("boom", code=1)
        with pytest.raises(AttributeError):
            error.code = 2
        with pytest.raises(AttributeError):
            error.status_code = 500

    def test_defaults(self):
        error = HttpError("x")
        assert error.code is None
        assert error.response is None
        assert error.status_code is None

    def test_repr(self):
        assert repr(HttpError("x", code=1, status_code=2)) == "HttpError('x', code=1, status_code=2)"

    def test_is_fetch_client_exception(self):
        assert isinstance(HttpError("x"), FetchClientException)


class TestSubclasses:
    """Test specialised error kinds."""

    def test_timeout(self):
        error = TimeoutError(100, "https://api.example.com/slow")
        assert isinstance(error, HttpError)
        assert error.status_code == 408
        assert error.code is None
        assert error.response is None
        assert str(error) == "Request timeout after 100ms"
        assert error.url == "https://api.example.com/slow"
        assert error.kind == "timeout"

    def test_timeout_fractional(self):
        assert str(TimeoutError(12.5)) == "Request timeout after 12.5ms"

    def test_transport(self):
        error = TransportError("Connection refused")
        assert error.code is None
        assert error.status_code is None
        assert error.kind == "transport"

    def test_http_status(self):
        error = HttpStatusError(500, "Internal Server Error")
        assert error.status_code == 500
        assert str(error) == "Internal Server Error"
        assert error.code is None

    def test_http_status_without_reason(self):
        assert str(HttpStatusError(599)) == "Request failed"

    def test_logout(self):
        error = LogoutError("expired", 401, {"code": 401})
        assert isinstance(error, ServerRejectedError)
        assert error.is_logout is True
        assert error.kind == "logout"

    def test_invalid_response(self):
        assert isinstance(InvalidResponseError("bad json"), HttpError)

    def test_configuration_error_is_type_error(self):
        """Bad config arguments surface as TypeError too."""
        assert issubclass(ConfigurationError, TypeError)
        assert not issubclass(ConfigurationError, HttpError)
