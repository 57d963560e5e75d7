"""Request context: prepared request and cancellation token."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import uuid

import httpx


class CancellationToken:
    """Single-shot cancellation flag shared between the owner and its observers.

    Only the owner calls ``cancel()``; observers register callbacks that run
    once, synchronously, when the token is cancelled.

    Example:
        >>> token = CancellationToken()
        >>> remove = token.add_callback(lambda: print("cancelled"))
        >>> token.cancel("timeout")
        cancelled
        >>> token.reason
        'timeout'
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None
        self._callbacks: List[Callable[[], Any]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Cancel the token. Repeated calls are no-ops."""
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], Any]) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it.

        If the token is already cancelled the callback runs immediately.
        """
        if self._cancelled:
            callback()
            return lambda: None

        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove


@dataclass
class PreparedRequest:
    """Outgoing request as seen by the request interceptor.

    Attributes:
        method: Upper-case HTTP method
        url: Full URL including query string
        headers: Final headers (mutable)
        content: Encoded JSON body, if any
        data: Multipart form fields, if any
        files: Multipart files, if any
        request_id: Unique identifier for this request

    Example:
        >>> def add_trace(url, prepared):
        ...     prepared.headers["X-Trace"] = prepared.request_id
    """

    method: str
    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: Optional[bytes] = None
    data: Optional[Dict[str, Any]] = None
    files: Optional[Dict[str, Any]] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_httpx(self, client: httpx.AsyncClient) -> httpx.Request:
        """Build the transport request."""
        return client.build_request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
            data=self.data or None,
            files=self.files or None,
        )
