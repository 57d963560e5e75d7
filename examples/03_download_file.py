"""
File Download Example

Бинарный ответ (octet-stream, excel, ...) приходит как BlobResult.
"""

import asyncio
import tempfile

from fetch_client import BlobResult, FetchClient, download_file


async def main():
    async with FetchClient(base_url="https://httpbin.org") as client:
        result = await client.get("/bytes/1024")

        if isinstance(result, BlobResult):
            with tempfile.TemporaryDirectory() as tmpdir:
                path = download_file(result, tmpdir, filename="random.bin")
                print(f"Saved {len(result.data)} bytes to {path}")
        else:
            print(f"Not a binary response: {result!r}")


if __name__ == "__main__":
    asyncio.run(main())
