#!/usr/bin/env python3
"""
Demo script for the service host.

Starts a host on a local port, registers a few services and calls them over
HTTP to show routing, response caching, cache expiry and auth.
"""

import asyncio
import dataclasses

import httpx

from service_host import Host, Settings


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def build_host() -> Host:
    settings = dataclasses.replace(
        Settings(),
        port=63579,
        auth_token="demo-token",
        cache_ttl=1.0,
        output_on_listen=True,
        silent=True,
    )
    host = Host(settings)
    counts = {"count": 0, "cached-count": 0}

    @host.service("count")
    def count(data, done):
        counts["count"] += 1
        done(None, counts["count"])

    @host.service("cached-count")
    def cached_count(data, done):
        counts["cached-count"] += 1
        done(None, counts["cached-count"])

    @host.service("shout")
    async def shout(data, done):
        await asyncio.sleep(0.05)
        if not isinstance(data, dict) or "text" not in data:
            done("expected a JSON body with a 'text' field")
            return
        done(None, data["text"].upper())

    return host


async def call(client: httpx.AsyncClient, service: str, cache_key: str | None = None, **kwargs) -> httpx.Response:
    headers = {"X-Service": service, "X-Auth-Token": "demo-token"}
    if cache_key is not None:
        headers["X-Cache-Key"] = cache_key
    return await client.post("/", headers=headers, **kwargs)


async def demo() -> None:
    host = build_host()
    await host.listen()

    try:
        async with httpx.AsyncClient(base_url=host.get_url()) as client:
            print_section("Routing")
            response = await call(client, "shout", json={"text": "hello host"})
            print(f"  shout -> {response.status_code} {response.text}")
            response = await call(client, "shout")
            print(f"  shout (no body) -> {response.status_code} {response.text}")
            response = await call(client, "missing")
            print(f"  missing -> {response.status_code} {response.text}")

            print_section("Caching")
            for key in ("k1", "k1", "k2", "k1"):
                response = await call(client, "cached-count", cache_key=key)
                print(f"  cached-count [{key}] -> {response.text}")
            for _ in range(3):
                response = await call(client, "count")
                print(f"  count -> {response.text}")

            print_section("Cache expiry")
            await asyncio.sleep(1.1)
            response = await call(client, "cached-count", cache_key="k1")
            print(f"  cached-count [k1] after ttl -> {response.text}")

            print_section("Auth")
            response = await client.post("/", headers={"X-Service": "count"})
            print(f"  no token -> {response.status_code} {response.text}")

            print_section("Stats")
            print(f"  {host.cache_stats().model_dump()}")
    finally:
        await host.stop_listening()


if __name__ == "__main__":
    asyncio.run(demo())
