"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PreloadStatus(StrEnum):
    """Lifecycle status of a submitted domain."""

    UNKNOWN = "unknown"  # synthetic, never persisted
    PENDING = "pending"
    PRELOADED = "preloaded"
    REJECTED = "rejected"
    REMOVED = "removed"
    PENDING_REMOVAL = "pending-removal"


class PreloadMode(StrEnum):
    """Entry modes found in the upstream preload list."""

    FORCE_HTTPS = "force-https"
