from __future__ import annotations

import base64
import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from preloadsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from preloadsync.adapters.preload_list import HttpPreloadListFetcher, parse_preload_list
from preloadsync.config import PreloadListConfig
from preloadsync.domain.errors import UpstreamFetchError
from preloadsync.domain.model import PreloadEntry

LIST_URL = "https://upstream.test/transport_security_state_static.json"

DOCUMENT = """// Copyright notice
// More comments
{
  "entries": [
    // Google domains
    { "name": "a.com", "policy": "google", "mode": "force-https", "include_subdomains": true },
    { "name": "pinned.com", "pins": "google" },
    { "name": "b.com", "mode": "force-https" }
  ]
}
"""


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


def _fetcher(handler: Callable[[httpx.Request], httpx.Response]) -> HttpPreloadListFetcher:
    config = PreloadListConfig(url=LIST_URL, resilience=ResilienceConfig(name="test"))
    return HttpPreloadListFetcher(config=config, client_factory=_make_client_factory(handler))


def test_parse_plain_document_strips_comments() -> None:
    preload_list = parse_preload_list(DOCUMENT)

    assert preload_list.entries == (
        PreloadEntry(name="a.com", mode="force-https", include_subdomains=True),
        PreloadEntry(name="pinned.com"),
        PreloadEntry(name="b.com", mode="force-https"),
    )
    assert preload_list.enforced_names() == ["a.com", "b.com"]


def test_parse_base64_document() -> None:
    encoded = base64.b64encode(DOCUMENT.encode()).decode()

    assert parse_preload_list(encoded) == parse_preload_list(DOCUMENT)


def test_fetcher_requests_configured_url() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text=base64.b64encode(DOCUMENT.encode()).decode())

    preload_list = _fetcher(handler)()

    assert seen == [LIST_URL]
    assert len(preload_list.entries) == 3


def test_fetcher_wraps_http_errors() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    with pytest.raises(UpstreamFetchError, match="could not retrieve latest preload list"):
        _fetcher(handler)()


def test_fetcher_wraps_invalid_payloads() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=json.dumps({"entries": [{"mode": "force-https"}]}))

    with pytest.raises(UpstreamFetchError):
        _fetcher(handler)()


def test_fetcher_wraps_undecodable_bodies() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="this is not base64 at all!")

    with pytest.raises(UpstreamFetchError):
        _fetcher(handler)()
