"""Ports for fetching external domain data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from preloadsync.domain.model import PreloadList


@runtime_checkable
class PreloadListFetcher(Protocol):
    """Callable port returning the current upstream preload list.

    Implementations raise ``UpstreamFetchError`` for any retrieval or parse failure.
    """

    def __call__(self) -> PreloadList: ...


__all__ = ["PreloadListFetcher"]
