"""HTTP fetcher for the upstream preload list."""

from __future__ import annotations

import asyncio
import base64
import binascii
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from preloadsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from preloadsync.config.preload_list import PreloadListConfig, get_preload_list_config
from preloadsync.domain.errors import UpstreamFetchError
from preloadsync.domain.model import PreloadEntry, PreloadList

from .schema import PreloadListPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from preloadsync.domain.ports.fetching import PreloadListFetcher

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _strip_comments(text: str) -> str:
    return "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("//"))


def parse_preload_list(body: str) -> PreloadList:
    """Parse a preload list document.

    Gitiles serves the source file base64 encoded; a body that does not look like
    JSON is decoded first. Full-line ``//`` comments are dropped before parsing.
    """

    text = body.strip()
    if not text.startswith(("{", "//")):
        text = base64.b64decode(text, validate=False).decode("utf-8")
    payload = PreloadListPayload.model_validate_json(_strip_comments(text))
    return PreloadList(
        entries=tuple(
            PreloadEntry(
                name=entry.name,
                mode=entry.mode,
                include_subdomains=entry.include_subdomains,
            )
            for entry in payload.entries
        )
    )


@dataclass(slots=True)
class HttpPreloadListFetcher:
    config: PreloadListConfig = field(default_factory=get_preload_list_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> PreloadList:
        return asyncio.run(self._fetch_async())

    async def _fetch_async(self) -> PreloadList:
        log.info("Fetching preload list from %s", self.config.url)
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.get(self.config.url)
                response.raise_for_status()
            preload_list = parse_preload_list(response.text)
        except (httpx.HTTPError, binascii.Error, UnicodeDecodeError, ValidationError) as exc:
            raise UpstreamFetchError(
                f"could not retrieve latest preload list. ({exc})"
            ) from exc
        log.info("Fetched preload list with %s entries", len(preload_list.entries))
        return preload_list


if TYPE_CHECKING:
    _fetcher_check: PreloadListFetcher = HttpPreloadListFetcher()
