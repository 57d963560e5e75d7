# src/fetch_client/core/headers.py
"""
Header providers и сборка заголовков запроса.

Заголовки из конфигурации задаются либо статически, либо функцией без
аргументов (sync или async), которая вызывается на каждый запрос.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import httpx

DEFAULT_CONTENT_TYPE = "application/json;charset=UTF-8"

HeadersLike = Union[Mapping[str, str], httpx.Headers]
HeaderProducer = Callable[[], Union[Optional[HeadersLike], Awaitable[Optional[HeadersLike]]]]


class HeaderProvider(ABC):
    """Источник заголовков из конфигурации клиента."""

    @abstractmethod
    async def resolve(self) -> httpx.Headers:
        """Вернуть новый набор заголовков (вызывающий может его менять)."""


class StaticHeaders(HeaderProvider):
    """Постоянный набор заголовков."""

    def __init__(self, headers: Optional[HeadersLike] = None):
        self._headers = httpx.Headers(headers or {})

    async def resolve(self) -> httpx.Headers:
        return self._headers.copy()

    def __repr__(self) -> str:
        return f"StaticHeaders({list(self._headers.keys())!r})"


class CallableHeaders(HeaderProvider):
    """
    Заголовки, вычисляемые функцией на каждый запрос.

    Example:
        >>> async def auth_headers():
        ...     token = await token_store.get()
        ...     return {"Authorization": f"Bearer {token}"}
        >>> provider = CallableHeaders(auth_headers)
    """

    def __init__(self, producer: HeaderProducer):
        if not callable(producer):
            raise TypeError("Header producer must be callable")
        self._producer = producer

    async def resolve(self) -> httpx.Headers:
        result = self._producer()
        if inspect.isawaitable(result):
            result = await result
        return httpx.Headers(result or {})

    def __repr__(self) -> str:
        name = getattr(self._producer, "__name__", repr(self._producer))
        return f"CallableHeaders({name})"


def as_header_provider(value: Any) -> HeaderProvider:
    """
    Привести значение из конфигурации к HeaderProvider.

    Args:
        value: None, mapping, httpx.Headers, callable или HeaderProvider

    Returns:
        HeaderProvider

    Raises:
        TypeError: Неподдерживаемый тип
    """
    if isinstance(value, HeaderProvider):
        return value
    if value is None or isinstance(value, (Mapping, httpx.Headers)):
        return StaticHeaders(value)
    if callable(value):
        return CallableHeaders(value)
    raise TypeError(f"Unsupported headers type: {type(value).__name__}")


async def build_headers(
    provider: HeaderProvider,
    per_call: Optional[HeadersLike] = None,
) -> httpx.Headers:
    """
    Собрать итоговые заголовки запроса.

    Заголовки из конфигурации перекрываются per-call заголовками
    (имена сравниваются без учёта регистра). Если Content-Type не задан,
    выставляется JSON по умолчанию. Входные объекты не изменяются.
    """
    headers = await provider.resolve()

    if per_call:
        for key, value in httpx.Headers(per_call).items():
            headers[key] = value

    if "content-type" not in headers:
        headers["Content-Type"] = DEFAULT_CONTENT_TYPE

    return headers
