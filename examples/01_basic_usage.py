"""
Basic Fetch Client Usage Examples

Demonstrates GET with query params, POST with JSON and unenveloped backends.
"""

import asyncio

from fetch_client import FetchClient


async def basic_get_request():
    """GET with query params."""
    print("\n=== Basic GET Request ===")

    async with FetchClient(base_url="https://jsonplaceholder.typicode.com") as client:
        # jsonplaceholder has no {code, data, message} envelope: payload is returned as is
        posts = await client.get("/posts", params={"userId": 1, "q": None})

        print(f"Posts: {len(posts)}")
        print(f"First: {posts[0]['title']}")


async def post_with_json():
    """POST request with JSON body."""
    print("\n=== POST with JSON ===")

    async with FetchClient(base_url="https://jsonplaceholder.typicode.com") as client:
        created = await client.post("/posts", json={
            "title": "My Post",
            "body": "This is the content",
            "userId": 1,
        })
        print(f"Created: {created}")


async def all_methods():
    """Verb shortcuts."""
    print("\n=== PUT / PATCH / DELETE ===")

    async with FetchClient(base_url="https://jsonplaceholder.typicode.com") as client:
        print(await client.put("/posts/1", json={"id": 1, "title": "Updated", "userId": 1}))
        print(await client.patch("/posts/1", json={"title": "Patched"}))
        print(await client.delete("/posts/1"))


async def main():
    await basic_get_request()
    await post_with_json()
    await all_methods()


if __name__ == "__main__":
    asyncio.run(main())
