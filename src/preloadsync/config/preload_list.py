"""Upstream preload list source configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

CHROMIUM_PRELOAD_LIST_URL = (
    "https://chromium.googlesource.com/chromium/src/+/main/"
    "net/http/transport_security_state_static.json?format=TEXT"
)
PRELOAD_LIST_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class PreloadListConfig:
    url: str
    resilience: ResilienceConfig


def get_preload_list_config(*, resilience: ResilienceConfig | None = None) -> PreloadListConfig:
    return PreloadListConfig(
        url=optional_env_var("PRELOAD_LIST_URL") or CHROMIUM_PRELOAD_LIST_URL,
        resilience=resilience
        or ResilienceConfig(
            name="preload-list",
            timeout_seconds=PRELOAD_LIST_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            # Only what the server marks cacheable is reused.
            cache=CacheConfig(backend="sqlite"),
        ),
    )
