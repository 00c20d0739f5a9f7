"""Submission requests for a single domain.

A submission runs the external policy check first. A domain that fails it gets the
validation issues back and the store is never consulted. Otherwise the decision
is keyed on the stored status:

==========================  =========================================
stored status               submission outcome
==========================  =========================================
unknown, rejected, removed  written as pending with a fresh timestamp
pending                     warning naming the original submission date
preloaded                   error, nothing written
pending-removal             error, nothing written
==========================  =========================================

The pending write is conditional on the stored status, so two racing
submissions end with one write and one "already pending" warning.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from preloadsync.domain.errors import StoreError, UnknownStatusError
from preloadsync.domain.model import DomainState, Issue, Issues, PreloadStatus

if TYPE_CHECKING:
    from preloadsync.domain.model import DomainName
    from preloadsync.domain.ports.eligibility import EligibilityCheck
    from preloadsync.domain.store import DomainStateStore

log = getLogger(__name__)

SAVE_FAILED: Final = Issue(
    code="internal.server.preload.save_failed",
    summary="Internal error",
    message="Unable to save to the pending list.",
)
ALREADY_PRELOADED: Final = Issue(
    code="server.preload.already_preloaded",
    summary="Domain is already preloaded",
    message="The domain is already preloaded.",
)
PENDING_REMOVAL: Final = Issue(
    code="server.preload.pending_removal",
    summary="Domain is pending removal",
    message="The domain is pending removal and cannot be resubmitted yet.",
)
UNKNOWN_STATUS: Final = Issue(
    code="internal.server.preload.unknown_status",
    summary="Internal error",
    message="Cannot preload; could not find domain status.",
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def format_submission_date(value: datetime | None) -> str:
    if value is None:
        return "an unknown date"
    return f"{value:%A}, {value.day:2d} {value:%B %Y}"


def already_pending(state: DomainState) -> Issue:
    return Issue(
        code="server.preload.already_pending",
        summary="Domain has already been submitted",
        message=(
            "Domain is already pending. It was submitted on "
            f"{format_submission_date(state.submission_date)}."
        ),
    )


@dataclass(slots=True)
class SubmissionService:
    store: DomainStateStore
    check_preloadable: EligibilityCheck
    clock: Callable[[], datetime] = field(default=_utcnow)

    def submit(self, name: DomainName) -> Issues:
        """Submit ``name`` for preloading and return the issues shown to the submitter."""

        issues = self.check_preloadable(name)
        if not issues.ok:
            log.info("Submission of %s failed the preload checks", name)
            return issues

        try:
            state = self.store.get(name)
        except UnknownStatusError:
            log.exception("Stored status of %s is unreadable", name)
            return issues.with_error(UNKNOWN_STATUS)

        if state.status not in {
            PreloadStatus.UNKNOWN,
            PreloadStatus.REJECTED,
            PreloadStatus.REMOVED,
        }:
            return self._existing_submission(state, issues)

        try:
            written = self.store.mark_pending(name, submitted_at=self.clock())
        except StoreError:
            log.exception("Could not record submission of %s", name)
            return issues.with_error(SAVE_FAILED)

        if written:
            log.info("Recorded %s as pending (was %s)", name, state.status)
            return issues

        # Another submission got there between the read and the write.
        try:
            current = self.store.get(name)
        except UnknownStatusError:
            log.exception("Stored status of %s is unreadable", name)
            return issues.with_error(UNKNOWN_STATUS)
        return self._existing_submission(current, issues)

    def _existing_submission(self, state: DomainState, issues: Issues) -> Issues:
        match state.status:
            case PreloadStatus.PENDING:
                return issues.with_warning(already_pending(state))
            case PreloadStatus.PRELOADED:
                return issues.with_error(ALREADY_PRELOADED)
            case PreloadStatus.PENDING_REMOVAL:
                return issues.with_error(PENDING_REMOVAL)
            case _:
                log.error("Unexpected status %s for %s", state.status, state.name)
                return issues.with_error(UNKNOWN_STATUS)

