"""Domain model for tracked preload list submissions."""

from __future__ import annotations

from .enums import PreloadMode, PreloadStatus
from .issues import Issue, Issues
from .preload_list import PreloadEntry, PreloadList
from .primitives import DomainName
from .state import DomainState

__all__ = [
    "DomainName",
    "DomainState",
    "Issue",
    "Issues",
    "PreloadEntry",
    "PreloadList",
    "PreloadMode",
    "PreloadStatus",
]
