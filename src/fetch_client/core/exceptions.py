"""
Иерархия исключений Fetch Client.

Все сбои запроса нормализуются в HttpError:
- TransportError - DNS, соединение, TLS (без code)
- TimeoutError - дедлайн истёк (status_code=408, без payload)
- HttpStatusError - HTTP статус вне 2xx (классификация не выполняется)
- ServerRejectedError - code из envelope не в success/ignore_error
  - LogoutError - code из набора logout
"""

from typing import Any, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FetchClientException(Exception):
    """Базовое исключение Fetch Client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(FetchClientException, TypeError):
    """Невалидная конфигурация или аргумент config()."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ERROR
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HttpError(FetchClientException):
    """
    Единый тип ошибки запроса.

    Атрибуты только для чтения после создания.

    Args:
        message: Человекочитаемое сообщение
        code: Код из envelope ответа сервера (не HTTP статус)
        response: Payload или сырой httpx.Response
        status_code: HTTP статус транспорта

    Examples:
        >>> err = HttpError("expired", code=401, response={"code": 401})
        >>> err.code
        401
    """

    kind: str = "generic"

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        response: Any = None,
        status_code: Optional[int] = None,
    ):
        self._code = code
        self._response = response
        self._status_code = status_code
        super().__init__(message)

    @property
    def code(self) -> Optional[int]:
        return self._code

    @property
    def response(self) -> Any:
        return self._response

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def is_logout(self) -> bool:
        return False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.message!r}, code={self._code!r}, "
            f"status_code={self._status_code!r})"
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(HttpError):
    """
    Сетевая ошибка.

    Примеры:
    - Connection refused
    - DNS resolution failed
    - TLS handshake failure
    """
    kind = "transport"

    def __init__(self, message: str):
        super().__init__(message)


class TimeoutError(HttpError):
    """
    Таймаут запроса.

    Args:
        timeout: Значение дедлайна (мс)
        url: URL запроса
    """
    kind = "timeout"

    def __init__(self, timeout: float, url: Optional[str] = None):
        self.timeout = timeout
        self.url = url
        super().__init__(f"Request timeout after {timeout:g}ms", status_code=408)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТВЕТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HttpStatusError(HttpError):
    """HTTP статус вне 2xx."""
    kind = "http_status"

    def __init__(self, status_code: int, reason: str = "", response: Any = None):
        super().__init__(
            reason or "Request failed",
            response=response,
            status_code=status_code,
        )


class InvalidResponseError(HttpError):
    """
    Невалидный ответ.

    Примеры:
    - Битый JSON
    - Невалидная кодировка
    """
    kind = "invalid_response"


class ServerRejectedError(HttpError):
    """Сервер вернул code, не входящий в success/ignore_error."""
    kind = "server_rejected"


class LogoutError(ServerRejectedError):
    """Code из набора logout - сессия больше не валидна."""
    kind = "logout"

    @property
    def is_logout(self) -> bool:
        return True
