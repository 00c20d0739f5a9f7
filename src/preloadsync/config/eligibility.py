"""Eligibility checker API configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_CHECKER_BASE_URL = "https://hstspreload.org/api/v2"
CHECKER_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class CheckerConfig:
    resilience: ResilienceConfig


def get_checker_config(*, resilience: ResilienceConfig | None = None) -> CheckerConfig:
    base_url = optional_env_var("PRELOAD_CHECKER_URL") or DEFAULT_CHECKER_BASE_URL
    return CheckerConfig(
        resilience=resilience
        or ResilienceConfig(
            name="eligibility",
            base_url=base_url.rstrip("/"),
            timeout_seconds=CHECKER_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        ),
    )
