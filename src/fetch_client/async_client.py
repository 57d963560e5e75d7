# src/fetch_client/async_client.py
"""
Асинхронный HTTP клиент на базе httpx.

Один вызов request() даёт ровно один исход: JSON payload (или его data
поле), BlobResult или HttpError.
"""

import json
import time
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import httpx

from .core.classifier import BlobResult, ResponseClassifier
from .core.config import (
    ClientConfig,
    FormData,
    HTTP_METHODS,
    METHODS_WITHOUT_BODY,
    RequestOptions,
)
from .core.context import PreparedRequest
from .core.error_handler import ErrorHandler
from .core.exceptions import ConfigurationError, HttpError
from .core.headers import build_headers
from .core.logging import FetchClientLogger
from .core.logging.filters import reset_correlation_id, set_correlation_id
from .core.transport import TransportExecutor
from .core.url_builder import append_params, build_url
from .core.utils import maybe_await


class FetchClient:
    """
    Асинхронный HTTP клиент с envelope-классификацией ответов.

    Example:
        >>> async with FetchClient(base_url="https://api.example.com") as client:
        ...     users = await client.get("/users", params={"page": 1}, return_data=True)

        >>> # Или без context manager
        >>> client = FetchClient(base_url="https://api.example.com")
        >>> await client.post("/users", json={"name": "alice"})
        >>> await client.close()

    Features:
        - base_url + query параметры, GET/HEAD json -> query
        - Заголовки из конфигурации (статические или функция)
        - Дедлайн на запрос с отменой in-flight вызова
        - Классификация {code, data, message} envelope
        - Бинарные ответы -> BlobResult
        - onError / onLogout / onSuccess callbacks и интерсепторы
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs: Any,
    ):
        """
        Инициализация клиента.

        Args:
            base_url: Базовый URL для всех запросов
            config: ClientConfig (если указан, остальные параметры игнорируются)
            transport: httpx транспорт (например httpx.MockTransport в тестах)
            **kwargs: Опции ClientConfig (timeout, codes, on_logout, ...)
        """
        if config is not None:
            self._config = config
        else:
            self._config = ClientConfig.create(base_url=base_url, **kwargs)

        self._transport = transport
        self._executor = TransportExecutor()
        self._logger: Optional[FetchClientLogger] = None
        self._sync_logger(None)

        # Клиент создаётся лениво или при входе в context manager
        self._client: Optional[httpx.AsyncClient] = None

    def _sync_logger(self, previous: Optional[ClientConfig]) -> None:
        """Пересоздать логгер, если изменились логирование или base_url (имя логгера)."""
        if (
            previous is not None
            and previous.logging == self._config.logging
            and previous.base_url == self._config.base_url
        ):
            return

        if self._logger is not None:
            self._logger.close()
            self._logger = None

        if self._config.logging is not None:
            logger_name = "fetch_client"
            if self._config.base_url:
                domain = urlparse(self._config.base_url).netloc
                if domain:
                    logger_name = f"fetch_client.{domain}"
            self._logger = FetchClientLogger(config=self._config.logging, name=logger_name)

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            client_kwargs: Dict[str, Any] = {
                # Дедлайном управляет TransportExecutor
                "timeout": httpx.Timeout(None),
            }
            if self._transport is not None:
                client_kwargs["transport"] = self._transport

            self._client = httpx.AsyncClient(**client_kwargs)
        return self._client

    async def __aenter__(self) -> "FetchClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        if self._logger is not None:
            self._logger.close()
            self._logger = None

    # ==================== Конфигурация ====================

    def config(self, partial: Optional[Mapping[str, Any]] = None, **changes: Any) -> None:
        """
        Shallow merge опций в текущую конфигурацию.

        Вложенные структуры (codes) заменяются целиком. Запросы, уже
        прочитавшие конфигурацию, продолжают работать со старой.

        Args:
            partial: Mapping опций
            **changes: Опции keyword-аргументами (важнее partial)

        Raises:
            ConfigurationError: partial не mapping или неизвестная опция

        Example:
            >>> client.config({"base_url": "https://api.example.com"})
            >>> client.config(codes={"success": [0], "logout": [401]})
        """
        if partial is None:
            partial = {}
        if not isinstance(partial, Mapping):
            raise ConfigurationError("Config must be a mapping")

        previous = self._config
        self._config = previous.merge({**partial, **changes})
        self._sync_logger(previous)

    @property
    def config_snapshot(self) -> ClientConfig:
        """Текущая (неизменяемая) конфигурация."""
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    # ==================== HTTP методы ====================

    async def request(
        self,
        url: str,
        options: Optional[RequestOptions] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Выполнить запрос.

        Args:
            url: Путь относительно base_url или абсолютный URL
            options: RequestOptions
            **kwargs: Поля RequestOptions (важнее options)

        Returns:
            Payload, значение data поля или BlobResult

        Raises:
            HttpError: Любой сбой (после уведомления callbacks)
            ConfigurationError: Неизвестная опция запроса
        """
        opts = RequestOptions.build(options, **kwargs)

        # Снимок конфигурации на весь запрос
        config = self._config
        logger = self._logger
        return_data = config.return_data if opts.return_data is None else opts.return_data
        timeout = config.timeout if opts.timeout is None else opts.timeout

        prepared: Optional[PreparedRequest] = None
        response: Optional[httpx.Response] = None
        correlation_token = None
        start_time = time.monotonic()

        try:
            prepared = await self._prepare(config, url, opts)

            if logger:
                correlation_token = set_correlation_id(prepared.request_id)
                logger.debug(
                    "Request started",
                    method=prepared.method,
                    url=prepared.url,
                    timeout_ms=timeout,
                )

            if config.request_interceptor is not None:
                await maybe_await(config.request_interceptor(prepared.url, prepared))

            client = await self._get_client()
            response = await self._executor.execute(client, prepared, timeout)

            classifier = ResponseClassifier(config)
            result = await classifier.classify(
                response, return_data, opts.ignore_error, opts.on_success
            )

            if config.response_interceptor is not None and isinstance(result, (dict, BlobResult)):
                result = await maybe_await(config.response_interceptor(result))

            if logger:
                logger.info(
                    "Request completed",
                    method=prepared.method,
                    url=prepared.url,
                    status_code=response.status_code,
                    duration_ms=round((time.monotonic() - start_time) * 1000, 2),
                )

            return result

        except Exception as e:
            if logger:
                error = ErrorHandler.normalize(e)
                log = logger.warning if opts.ignore_error else logger.error
                log(
                    "Request failed",
                    method=prepared.method if prepared else None,
                    url=prepared.url if prepared else url,
                    error=str(error),
                    error_type=type(error).__name__,
                    code=error.code,
                    status_code=error.status_code,
                    duration_ms=round((time.monotonic() - start_time) * 1000, 2),
                )
            await ErrorHandler(config).handle(e, opts.ignore_error, opts.on_error, opts.on_logout)

        finally:
            if response is not None:
                await response.aclose()
            if correlation_token is not None:
                reset_correlation_id(correlation_token)

    async def _prepare(
        self,
        config: ClientConfig,
        url: str,
        opts: RequestOptions,
    ) -> PreparedRequest:
        """Собрать URL, заголовки и тело запроса."""
        method = (opts.method or config.default_method).upper()
        if method not in HTTP_METHODS:
            raise HttpError(f"Unsupported HTTP method: {method}")

        full_url = append_params(build_url(config.base_url, url), opts.params)
        headers = await build_headers(config.headers, opts.headers)
        prepared = PreparedRequest(method=method, url=full_url, headers=headers)

        body = opts.json
        if body is None:
            return prepared

        if method in METHODS_WITHOUT_BODY:
            # Тело GET/HEAD уходит в query string
            if isinstance(body, Mapping):
                prepared.url = append_params(prepared.url, body)
        elif isinstance(body, FormData):
            # Content-Type с boundary выставит httpx
            del prepared.headers["content-type"]
            prepared.data = dict(body.data)
            prepared.files = dict(body.files)
        else:
            prepared.content = json.dumps(body, separators=(",", ":")).encode("utf-8")

        return prepared

    # ==================== Удобные методы ====================

    async def get(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """GET запрос."""
        return await self.request(url, options, **{**kwargs, "method": "GET"})

    async def post(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """POST запрос."""
        return await self.request(url, options, **{**kwargs, "method": "POST"})

    async def put(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """PUT запрос."""
        return await self.request(url, options, **{**kwargs, "method": "PUT"})

    async def delete(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """DELETE запрос."""
        return await self.request(url, options, **{**kwargs, "method": "DELETE"})

    async def patch(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """PATCH запрос."""
        return await self.request(url, options, **{**kwargs, "method": "PATCH"})

    async def head(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """HEAD запрос."""
        return await self.request(url, options, **{**kwargs, "method": "HEAD"})

    async def options(self, url: str, options: Optional[RequestOptions] = None, **kwargs) -> Any:
        """OPTIONS запрос."""
        return await self.request(url, options, **{**kwargs, "method": "OPTIONS"})


def create_client(config: Optional[ClientConfig] = None, **kwargs: Any) -> FetchClient:
    """
    Создать независимо сконфигурированный клиент.

    Example:
        >>> admin = create_client(base_url="https://admin.example.com", return_data=True)
    """
    return FetchClient(config=config, **kwargs)


# Process-wide default client (создаётся при первом обращении)
_default_client: Optional[FetchClient] = None


def get_default_client() -> FetchClient:
    """
    Получить клиент по умолчанию.

    Example:
        >>> rq = get_default_client()
        >>> rq.config(base_url="https://api.example.com")
    """
    global _default_client

    if _default_client is None:
        _default_client = FetchClient()

    return _default_client


def set_default_client(client: Optional[FetchClient]) -> None:
    """Заменить клиент по умолчанию (None - сбросить)."""
    global _default_client
    _default_client = client
