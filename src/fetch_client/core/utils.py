"""
Utility functions for Fetch Client.
"""

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """
    Await ``value`` if it is awaitable, otherwise return it unchanged.

    Callbacks and interceptors may be plain functions or coroutine functions.

    Example:
        >>> result = await maybe_await(callback(payload))
    """
    if inspect.isawaitable(value):
        return await value
    return value
