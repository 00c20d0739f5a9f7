from __future__ import annotations

import asyncio
from pathlib import Path  # noqa: TC003

import httpx
import pytest
from hishel.httpx import AsyncCacheClient

from preloadsync.adapters.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    ResilientClient,
)


def test_client_without_cache_is_plain_httpx() -> None:
    client = ResilientClient(ResilienceConfig(name="plain"))

    inner = client._client  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert type(inner) is httpx.AsyncClient
    asyncio.run(client.aclose())


def test_client_with_cache_uses_hishel(tmp_path: Path) -> None:
    cache = CacheConfig(backend="sqlite", sqlite_path=str(tmp_path / "cache.db"))
    client = ResilientClient(ResilienceConfig(name="cached", cache=cache))

    inner = client._client  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert isinstance(inner, AsyncCacheClient)
    asyncio.run(client.aclose())


def test_unsupported_cache_backend() -> None:
    cache = CacheConfig(backend="redis")  # type: ignore[arg-type]

    with pytest.raises(ValueError, match="redis"):
        ResilientClient(ResilienceConfig(name="bad", cache=cache))


def test_rate_limited_get_passes_through() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"path": request.url.path})

    async def run() -> list[str]:
        config = ResilienceConfig(
            name="limited",
            base_url="https://api.test",
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        )
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url="https://api.test",
                transport=httpx.MockTransport(handler),
            )
            responses = [await client.get(f"/item/{index}") for index in range(3)]
        return [response.json()["path"] for response in responses]

    assert asyncio.run(run()) == ["/item/0", "/item/1", "/item/2"]
