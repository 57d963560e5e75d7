# src/fetch_client/core/transport.py
"""
Transport executor: отправка запроса под дедлайном.

Дедлайн покрывает только получение заголовков ответа (запрос
отправляется с stream=True); тело читается классификатором.
"""

import asyncio
from typing import Optional

import httpx

from .context import CancellationToken, PreparedRequest
from .exceptions import TimeoutError

TIMEOUT_REASON = "timeout"


class TransportExecutor:
    """
    Выполняет один запрос через httpx.AsyncClient.

    На каждый вызов создаются свой CancellationToken и таймер. Срабатывание
    таймера отменяет токен, токен отменяет задачу отправки. Таймер
    снимается на любом пути выхода.

    Example:
        >>> executor = TransportExecutor()
        >>> response = await executor.execute(client, prepared, timeout_ms=5000)
    """

    async def execute(
        self,
        client: httpx.AsyncClient,
        prepared: PreparedRequest,
        timeout_ms: float,
        token: Optional[CancellationToken] = None,
    ) -> httpx.Response:
        """
        Отправить запрос и дождаться заголовков ответа.

        Args:
            client: httpx клиент
            prepared: Подготовленный запрос
            timeout_ms: Дедлайн (мс)
            token: Токен отмены (по умолчанию создаётся новый)

        Returns:
            httpx.Response в stream режиме (тело ещё не прочитано)

        Raises:
            TimeoutError: Дедлайн истёк до получения заголовков
            httpx.TransportError: Сетевая ошибка (пробрасывается как есть)
        """
        token = token or CancellationToken()
        loop = asyncio.get_running_loop()
        request = prepared.to_httpx(client)

        send_task = asyncio.ensure_future(client.send(request, stream=True))
        remove_callback = token.add_callback(send_task.cancel)
        timer = loop.call_later(timeout_ms / 1000, token.cancel, TIMEOUT_REASON)

        try:
            return await send_task
        except asyncio.CancelledError:
            if token.cancelled and token.reason == TIMEOUT_REASON:
                raise TimeoutError(timeout_ms, prepared.url) from None
            raise
        except httpx.TimeoutException as e:
            raise TimeoutError(timeout_ms, prepared.url) from e
        finally:
            timer.cancel()
            remove_callback()
