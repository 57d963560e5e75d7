"""
Система конфигурации для Fetch Client.

ClientConfig - frozen dataclass. Клиент меняет конфигурацию заменой
объекта целиком (shallow merge), поэтому запрос, уже прочитавший
конфигурацию, работает со своим снимком.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import (
    Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union, TYPE_CHECKING,
)

from .exceptions import ConfigurationError
from .headers import HeaderProvider, as_header_provider

if TYPE_CHECKING:
    from .exceptions import HttpError
    from .logging import LoggingConfig

DEFAULT_SUCCESS_CODES = (200,)
DEFAULT_LOGOUT_CODES = (401, 403)
DEFAULT_BLOB_CONTENT_TYPES = ("stream", "excel", "download", "blob", "octet-stream")
DEFAULT_TIMEOUT_MS = 30000

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"})
METHODS_WITHOUT_BODY = frozenset({"GET", "HEAD"})

ErrorCallback = Callable[["HttpError"], Union[None, Awaitable[None]]]
SuccessCallback = Callable[[Any], Union[None, Awaitable[None]]]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CODES CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _int_tuple(values: Iterable[int], name: str) -> Tuple[int, ...]:
    if isinstance(values, (str, bytes)):
        raise ConfigurationError(f"codes.{name} must be a sequence of integers")
    try:
        return tuple(int(v) for v in values)
    except (TypeError, ValueError):
        raise ConfigurationError(f"codes.{name} must be a sequence of integers")


@dataclass(frozen=True)
class CodesConfig:
    """
    Наборы кодов для классификации envelope ответа.

    Порядок сохраняется: первый success код используется как code
    у BlobResult.

    Args:
        success: Коды успешного ответа
        logout: Коды, требующие разлогина
        ignore_error: Коды ошибок, которые возвращаются без исключения

    Examples:
        >>> CodesConfig(success=[0], logout=[401])
        >>> CodesConfig.coerce({"success": [0]})  # logout берётся по умолчанию
    """
    success: Tuple[int, ...] = DEFAULT_SUCCESS_CODES
    logout: Tuple[int, ...] = DEFAULT_LOGOUT_CODES
    ignore_error: Tuple[int, ...] = ()

    def __post_init__(self):
        """Нормализация в кортежи."""
        for name in ("success", "logout", "ignore_error"):
            object.__setattr__(self, name, _int_tuple(getattr(self, name), name))

    @classmethod
    def coerce(cls, value: Union["CodesConfig", Mapping[str, Any], None]) -> "CodesConfig":
        """Привести mapping к CodesConfig; отсутствующие поля берутся по умолчанию."""
        if value is None:
            return cls()
        if isinstance(value, CodesConfig):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError("codes must be a mapping or CodesConfig")

        unknown = set(value) - {"success", "logout", "ignore_error"}
        if unknown:
            raise ConfigurationError(f"Unknown codes option(s): {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in value.items() if v is not None})

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация FetchClient.

    Args:
        base_url: Префикс для относительных путей
        headers: Заголовки (mapping, функция или HeaderProvider)
        blob_content_types: Подстроки Content-Type для бинарных ответов
        code_key: Поле envelope со статус кодом
        data_key: Поле envelope с данными
        message_key: Поле envelope с сообщением
        return_data: Возвращать только data поле по умолчанию
        default_method: Метод, если запрос его не указал
        timeout: Дедлайн запроса (мс)
        codes: Наборы кодов классификации
        on_error: Callback на каждую не проигнорированную ошибку
        on_logout: Callback на logout код
        on_success: Callback на успешный envelope
        request_interceptor: Вызывается с (url, PreparedRequest) перед отправкой
        response_interceptor: Преобразует успешный результат
        logging: Конфигурация логирования (None = без логов)

    Examples:
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config = ClientConfig.create(timeout=5000, codes={"success": [0]})
    """
    base_url: str = ""
    headers: HeaderProvider = field(default_factory=lambda: as_header_provider(None))
    blob_content_types: Tuple[str, ...] = DEFAULT_BLOB_CONTENT_TYPES
    code_key: str = "code"
    data_key: str = "data"
    message_key: str = "message"
    return_data: bool = False
    default_method: str = "GET"
    timeout: float = DEFAULT_TIMEOUT_MS
    codes: CodesConfig = field(default_factory=CodesConfig)

    on_error: Optional[ErrorCallback] = None
    on_logout: Optional[ErrorCallback] = None
    on_success: Optional[SuccessCallback] = None
    request_interceptor: Optional[Callable[..., Any]] = None
    response_interceptor: Optional[Callable[[Any], Any]] = None

    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Нормализация и валидация."""
        if self.base_url is None:
            object.__setattr__(self, 'base_url', "")
        elif not isinstance(self.base_url, str):
            raise ConfigurationError("base_url must be a string")

        try:
            object.__setattr__(self, 'headers', as_header_provider(self.headers))
        except TypeError as e:
            raise ConfigurationError(str(e)) from e

        object.__setattr__(self, 'codes', CodesConfig.coerce(self.codes))
        object.__setattr__(
            self, 'blob_content_types',
            tuple(t.lower() for t in self.blob_content_types),
        )

        method = str(self.default_method or "GET").upper()
        if method not in HTTP_METHODS:
            raise ConfigurationError(f"Unsupported default_method: {self.default_method}")
        object.__setattr__(self, 'default_method', method)

        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

        for name in ("on_error", "on_logout", "on_success",
                     "request_interceptor", "response_interceptor"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise ConfigurationError(f"{name} must be callable")

    @classmethod
    def option_names(cls) -> frozenset:
        return frozenset(f.name for f in dataclasses.fields(cls))

    @classmethod
    def create(cls, base_url: Optional[str] = None, **kwargs) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Неизвестные опции - ConfigurationError (а не TypeError dataclass).

        Examples:
            >>> ClientConfig.create("https://api.example.com", return_data=True)
        """
        unknown = set(kwargs) - cls.option_names()
        if unknown:
            raise ConfigurationError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        return cls(base_url=base_url or "", **kwargs)

    def merge(self, partial: Mapping[str, Any]) -> 'ClientConfig':
        """
        Shallow merge: вернуть новый конфиг с заменёнными ключами.

        Вложенные структуры (codes) заменяются целиком.

        Args:
            partial: Mapping с опциями

        Returns:
            Новый ClientConfig

        Raises:
            ConfigurationError: partial не mapping или содержит неизвестные ключи

        Example:
            >>> new_config = config.merge({"timeout": 5000})
        """
        if not isinstance(partial, Mapping):
            raise ConfigurationError("Config must be a mapping")

        unknown = set(partial) - self.option_names()
        if unknown:
            raise ConfigurationError(f"Unknown config option(s): {', '.join(sorted(unknown))}")

        return dataclasses.replace(self, **dict(partial))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REQUEST OPTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass
class FormData:
    """
    Multipart payload.

    Для методов с телом отправляется как multipart/form-data, для GET/HEAD
    в query не попадает.

    Example:
        >>> FormData(data={"name": "report"}, files={"file": ("a.csv", b"1,2")})
    """
    data: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RequestOptions:
    """
    Per-call параметры запроса.

    None означает "взять из ClientConfig". Per-call callbacks вызываются
    вместо соответствующих callbacks конфигурации.
    """
    method: Optional[str] = None
    json: Any = None
    params: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, str]] = None
    ignore_error: bool = False
    return_data: Optional[bool] = None
    timeout: Optional[float] = None
    on_error: Optional[ErrorCallback] = None
    on_logout: Optional[ErrorCallback] = None
    on_success: Optional[SuccessCallback] = None

    def __post_init__(self):
        # Тот же инвариант, что и у ClientConfig.timeout
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @classmethod
    def build(cls, options: Optional['RequestOptions'] = None, **kwargs) -> 'RequestOptions':
        """Объединить options и kwargs (kwargs важнее)."""
        names = {f.name for f in dataclasses.fields(cls)}
        unknown = set(kwargs) - names
        if unknown:
            raise ConfigurationError(f"Unknown request option(s): {', '.join(sorted(unknown))}")
        if options is None:
            return cls(**kwargs)
        if not isinstance(options, RequestOptions):
            raise ConfigurationError("options must be RequestOptions")
        return dataclasses.replace(options, **kwargs)
