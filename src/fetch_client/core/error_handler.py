# src/fetch_client/core/error_handler.py

import warnings
from typing import NoReturn, Optional

import httpx

from .config import ClientConfig, ErrorCallback
from .exceptions import HttpError, TransportError
from .utils import maybe_await


class ErrorHandler:
    """Нормализует ошибки запроса и решает, кого уведомить"""

    def __init__(self, config: ClientConfig):
        self._config = config

    @staticmethod
    def normalize(error: BaseException) -> HttpError:
        """Привести любое исключение к HttpError"""

        if isinstance(error, HttpError):
            return error

        if isinstance(error, (httpx.TransportError, OSError)):
            return TransportError(str(error) or type(error).__name__)

        return HttpError(str(error) or "Unknown error")

    async def handle(
        self,
        error: BaseException,
        ignore_error: bool = False,
        on_error: Optional[ErrorCallback] = None,
        on_logout: Optional[ErrorCallback] = None,
    ) -> NoReturn:
        """
        Уведомить callbacks и пробросить нормализованную ошибку.

        Args:
            error: Пойманное исключение
            ignore_error: Пропустить все callbacks
            on_error: Per-call callback (заменяет config.on_error)
            on_logout: Per-call callback (заменяет config.on_logout)

        Raises:
            HttpError: Всегда
        """
        http_error = self.normalize(error)

        if not ignore_error:
            # Logout callback срабатывает раньше общего
            if http_error.code is not None and http_error.code in self._config.codes.logout:
                await self._notify(on_logout or self._config.on_logout, http_error)

            await self._notify(on_error or self._config.on_error, http_error)

        if http_error is error:
            raise http_error
        raise http_error from error

    @staticmethod
    async def _notify(callback: Optional[ErrorCallback], error: HttpError) -> None:
        if callback is None:
            return
        try:
            await maybe_await(callback(error))
        except Exception as callback_error:
            warnings.warn(
                f"Callback {getattr(callback, '__name__', callback)!r} failed: {callback_error}"
            )
