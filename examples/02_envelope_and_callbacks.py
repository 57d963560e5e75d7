"""
Envelope classification and callbacks.

Backend отвечает {code, data, message}; success/logout коды и callbacks
настраиваются на клиенте.
"""

import asyncio

from fetch_client import FetchClient, HttpError, LoggingConfig


def redirect_to_login(error: HttpError) -> None:
    print(f"-> logout: {error} (code={error.code})")


async def report_error(error: HttpError) -> None:
    print(f"-> error: {error.kind} {error}")


async def main():
    client = FetchClient(
        base_url="https://api.example.com",
        headers=lambda: {"Authorization": "Bearer demo-token"},
        codes={"success": [0], "logout": [401, 403], "ignore_error": [4001]},
        return_data=True,
        timeout=5000,
        on_logout=redirect_to_login,
        on_error=report_error,
        logging=LoggingConfig.create(level="DEBUG", format="colored"),
    )

    async with client:
        try:
            profile = await client.get("/me")
            print(f"Profile: {profile}")
        except HttpError as e:
            print(f"Request failed: {e!r}")

        # Без callbacks и без исключения для server-rejected кодов
        try:
            payload = await client.get("/me", ignore_error=True, return_data=False)
            print(f"Raw payload: {payload}")
        except HttpError as e:
            print(f"Transport level failure: {e!r}")

        # Shallow merge: codes заменяются целиком
        client.config(codes={"success": [200]})
        print(client.config_snapshot.codes)


if __name__ == "__main__":
    asyncio.run(main())
