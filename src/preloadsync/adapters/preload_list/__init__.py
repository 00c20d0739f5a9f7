"""Public interface for the upstream preload list adapter."""

from __future__ import annotations

from .client import HttpPreloadListFetcher, parse_preload_list
from .schema import EntryPayload, PreloadListPayload

__all__ = [
    "EntryPayload",
    "HttpPreloadListFetcher",
    "PreloadListPayload",
    "parse_preload_list",
]
