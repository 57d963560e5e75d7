"""
Environment Configuration Example.

FETCH_CLIENT_* переменные или .env файл -> ClientConfig.
"""

import asyncio
import os

from fetch_client import FetchClient, load_from_env


async def main():
    os.environ.setdefault("FETCH_CLIENT_BASE_URL", "https://jsonplaceholder.typicode.com")
    os.environ.setdefault("FETCH_CLIENT_TIMEOUT", "10000")
    os.environ.setdefault("FETCH_CLIENT_LOG_ENABLED", "true")
    os.environ.setdefault("FETCH_CLIENT_LOG_FORMAT", "json")

    config = load_from_env(on_error=lambda error: print(f"failed: {error}"))
    print(f"base_url={config.base_url} timeout={config.timeout}ms")

    async with FetchClient(config=config) as client:
        todo = await client.get("/todos/1")
        print(todo)


if __name__ == "__main__":
    asyncio.run(main())
