# src/fetch_client/utils/sanitizer.py
"""
Маскирование чувствительных данных перед записью в лог.
"""

import re
from typing import Any, Dict

DEFAULT_MASK = "***REDACTED***"

# Имена полей (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    'password', 'passwd', 'pwd',
    'token', 'access_token', 'refresh_token', 'jwt',
    'secret', 'client_secret', 'api_key', 'apikey', 'private_key',
    'authorization', 'auth', 'cookie', 'session', 'csrf',
    'credentials', 'otp',
}

SENSITIVE_PATTERNS = [
    # Bearer / Basic в заголовках
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + DEFAULT_MASK),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1' + DEFAULT_MASK),
    # user:password@host
    (re.compile(r'(://[^:/@\s]+:)([^@/\s]+)(@)'), r'\1' + DEFAULT_MASK + r'\3'),
]


def _is_sensitive_key(key: str) -> bool:
    key = key.lower()
    return any(sensitive in key for sensitive in SENSITIVE_KEYS)


def _mask_query(text: str, mask: str) -> str:
    def replace(match: "re.Match[str]") -> str:
        name = match.group(2)
        return f"{match.group(1)}{name}={mask}" if _is_sensitive_key(name) else match.group(0)

    return re.sub(r'([?&])([^=&#\s]+)=([^&#\s]*)', replace, text)


def _mask_string(text: str, mask: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement.replace(DEFAULT_MASK, mask), text)
    return _mask_query(text, mask)


def _mask_dict(data: Dict[Any, Any], mask: str) -> Dict[Any, Any]:
    return {
        key: mask if _is_sensitive_key(str(key)) else mask_sensitive_data(value, mask)
        for key, value in data.items()
    }


def mask_sensitive_data(data: Any, mask: str = DEFAULT_MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Examples:
        >>> mask_sensitive_data({"Authorization": "Bearer abc", "page": 1})
        {'Authorization': '***REDACTED***', 'page': 1}

        >>> mask_sensitive_data("https://api.example.com/x?token=abc&page=1")
        'https://api.example.com/x?token=***REDACTED***&page=1'
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return _mask_string(data, mask)

    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def add_sensitive_keys(*keys: str) -> None:
    """
    Расширить набор чувствительных ключей.

    Example:
        >>> add_sensitive_keys('tenant_secret_id')
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())
