"""HTTP client for the preload eligibility checks."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Literal

import httpx
from pydantic import ValidationError

from preloadsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from preloadsync.config.eligibility import CheckerConfig, get_checker_config
from preloadsync.domain.errors import EligibilityCheckError
from preloadsync.domain.model import Issue, Issues

from .schema import IssuePayload, IssuesPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from preloadsync.domain.model import DomainName
    from preloadsync.domain.ports.eligibility import EligibilityCheck

log = getLogger(__name__)

type CheckKind = Literal["preloadable", "removable"]


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _issue(payload: IssuePayload) -> Issue:
    return Issue(code=payload.code, summary=payload.summary, message=payload.message)


def translate_issues(payload: IssuesPayload) -> Issues:
    return Issues(
        errors=tuple(_issue(item) for item in payload.errors),
        warnings=tuple(_issue(item) for item in payload.warnings),
    )


@dataclass(slots=True)
class HttpEligibilityChecker:
    """Ask the checker API whether a domain may be preloaded (or removed)."""

    kind: CheckKind = "preloadable"
    config: CheckerConfig = field(default_factory=get_checker_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, domain: DomainName) -> Issues:
        return asyncio.run(self._check_async(domain))

    async def _check_async(self, domain: DomainName) -> Issues:
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.get(f"/{self.kind}", params={"domain": domain})
                response.raise_for_status()
            payload = IssuesPayload.model_validate_json(response.content)
        except (httpx.HTTPError, ValidationError) as exc:
            log.error("Eligibility check %s for %s failed: %s", self.kind, domain, exc)
            raise EligibilityCheckError(
                f"could not check whether {domain} is {self.kind}. ({exc})"
            ) from exc
        return translate_issues(payload)


if TYPE_CHECKING:
    _check: EligibilityCheck = HttpEligibilityChecker()
