"""Fakes for the upstream preload list and the eligibility checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from preloadsync.domain.errors import UpstreamFetchError
from preloadsync.domain.model import (
    Issue,
    Issues,
    PreloadEntry,
    PreloadList,
    PreloadMode,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from preloadsync.domain.model import DomainName


def make_preload_list(
    enforced: Iterable[DomainName] = (),
    *,
    unenforced: Iterable[DomainName] = (),
) -> PreloadList:
    entries = [
        PreloadEntry(name=name, mode=PreloadMode.FORCE_HTTPS, include_subdomains=True)
        for name in enforced
    ]
    entries.extend(PreloadEntry(name=name) for name in unenforced)
    return PreloadList(entries=tuple(entries))


@dataclass
class StaticPreloadListFetcher:
    preload_list: PreloadList = field(default_factory=PreloadList)
    error: UpstreamFetchError | None = None
    calls: int = 0

    def __call__(self) -> PreloadList:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.preload_list


@dataclass
class CannedEligibilityCheck:
    """Returns the same issues for every domain and records what it was asked."""

    issues: Issues = field(default_factory=Issues)
    checked: list[DomainName] = field(default_factory=list)

    def __call__(self, domain: DomainName) -> Issues:
        self.checked.append(domain)
        return self.issues


def failing_issues(code: str = "domain.tls.invalid_cert_chain") -> Issues:
    return Issues(errors=(Issue(code=code, summary="Invalid certificate chain", message="..."),))


def warning_issues(code: str = "header.preloadable.max_age.over_18_weeks") -> Issues:
    return Issues(warnings=(Issue(code=code, summary="Long max-age", message="..."),))
