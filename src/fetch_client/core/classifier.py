# src/fetch_client/core/classifier.py
"""
Классификация ответа.

Порядок проверок:
1. HTTP статус вне 2xx -> HttpStatusError
2. Content-Type содержит бинарный маркер -> BlobResult
3. Пустое тело -> None; JSON без поля code -> payload как есть
4. code в success / ignore_error / logout / прочее
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import unquote

import httpx

from .config import ClientConfig, SuccessCallback
from .exceptions import HttpStatusError, InvalidResponseError, LogoutError, ServerRejectedError
from .utils import maybe_await

_FILENAME_RE = re.compile(r"""filename[^;=\n]*=((['"]).*?\2|[^;\n]*)""", re.IGNORECASE)


@dataclass
class BlobResult:
    """
    Бинарный ответ (скачивание файла).

    Attributes:
        data: Тело ответа
        filename: Имя файла из Content-Disposition
        response: Сырой httpx.Response
        code: Первый success код из конфигурации
    """
    data: bytes
    filename: Optional[str]
    response: httpx.Response
    code: Optional[int] = None


def extract_filename(content_disposition: Optional[str]) -> Optional[str]:
    """
    Извлечь имя файла из Content-Disposition.

    Examples:
        >>> extract_filename('attachment; filename="a.csv"')
        'a.csv'
        >>> extract_filename('attachment; filename=%D0%BE%D1%82%D1%87%D1%91%D1%82.xlsx')
        'отчёт.xlsx'
    """
    if not content_disposition:
        return None

    match = _FILENAME_RE.search(content_disposition)
    if not match or not match.group(1):
        return None

    filename = match.group(1).replace('"', "").replace("'", "")
    try:
        return unquote(filename, errors="strict")
    except UnicodeDecodeError:
        # Невалидный UTF-8 - оставляем имя как есть
        return filename


class ResponseClassifier:
    """Превращает httpx.Response в результат запроса или HttpError."""

    def __init__(self, config: ClientConfig):
        self._config = config

    def is_blob(self, response: httpx.Response) -> bool:
        content_type = response.headers.get("content-type", "").lower()
        return any(marker in content_type for marker in self._config.blob_content_types)

    async def classify(
        self,
        response: httpx.Response,
        return_data: bool,
        ignore_error: bool,
        on_success: Optional[SuccessCallback] = None,
    ) -> Any:
        """
        Классифицировать ответ.

        Args:
            response: Ответ в stream режиме
            return_data: Вернуть только поле data_key
            ignore_error: Не бросать ошибку для server-rejected кодов
            on_success: Per-call callback (иначе из конфигурации)

        Returns:
            Payload, значение data_key или BlobResult

        Raises:
            HttpStatusError: HTTP статус вне 2xx
            InvalidResponseError: Тело не JSON
            LogoutError: code из набора logout
            ServerRejectedError: Прочие коды ошибок
        """
        config = self._config

        if not response.is_success:
            await response.aread()
            raise HttpStatusError(response.status_code, response.reason_phrase, response)

        if self.is_blob(response):
            data = await response.aread()
            success = config.codes.success
            return BlobResult(
                data=data,
                filename=extract_filename(response.headers.get("content-disposition")),
                response=response,
                code=success[0] if success else None,
            )

        body = await response.aread()
        if not body.strip():
            # HEAD, 204 и пустые ответы: классифицировать нечего
            return None

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidResponseError(f"Invalid JSON response: {e}", response=response) from e

        # Backend без envelope: возвращаем как есть
        if not isinstance(payload, dict) or config.code_key not in payload:
            return payload

        code = payload[config.code_key]
        message = payload.get(config.message_key)
        codes = config.codes

        if code in codes.success:
            if return_data and config.data_key in payload:
                return payload[config.data_key]
            callback = on_success or config.on_success
            if callback is not None:
                await maybe_await(callback(payload))
            return payload

        if ignore_error or code in codes.ignore_error:
            return payload

        if code in codes.logout:
            raise LogoutError(message or "Unauthorized", code, payload)

        raise ServerRejectedError(message or "Request failed", code, payload)
