"""
Сборка URL: base_url + путь + query параметры.
"""

from typing import Any, Mapping, Optional
from urllib.parse import urlencode

ABSOLUTE_URL_PREFIXES = ("http://", "https://")


def build_url(base_url: Optional[str], path: str) -> str:
    """
    Строит полный URL из base_url и пути.

    Абсолютный путь возвращается как есть. Иначе между base_url и путём
    ставится ровно один "/".

    Args:
        base_url: Базовый URL (может быть пустым)
        path: Путь или абсолютный URL

    Returns:
        Полный URL

    Raises:
        TypeError: path не строка

    Examples:
        >>> build_url("https://api.example.com/", "/users")
        'https://api.example.com/users'
        >>> build_url("https://api.example.com", "https://other.com/x")
        'https://other.com/x'
    """
    if not isinstance(path, str):
        raise TypeError("URL must be a string")

    if path.lower().startswith(ABSOLUTE_URL_PREFIXES):
        return path

    if not base_url:
        return path

    base = base_url[:-1] if base_url.endswith("/") else base_url
    normalized = path if path.startswith("/") else f"/{path}"
    return base + normalized


def _stringify(value: Any) -> str:
    # Булевы значения как в query string браузера
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def append_params(url: str, params: Optional[Mapping[str, Any]]) -> str:
    """
    Добавить query параметры к URL.

    Ключи со значением None пропускаются, остальные значения приводятся к
    строке. Порядок ключей сохраняется. Если в URL уже есть "?",
    параметры добавляются через "&".

    Raises:
        TypeError: params не mapping

    Examples:
        >>> append_params("/users", {"page": 1, "q": None})
        '/users?page=1'
        >>> append_params("/users?page=1", {"size": 20})
        '/users?page=1&size=20'
    """
    if params is None:
        return url
    if not isinstance(params, Mapping):
        raise TypeError("Params must be a mapping")

    pairs = [(str(key), _stringify(value)) for key, value in params.items() if value is not None]
    if not pairs:
        return url

    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(pairs)}"
