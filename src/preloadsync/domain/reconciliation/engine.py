"""Reconcile recorded domain states against the upstream preload list.

A run fetches the upstream list, reads the locally preloaded and pending-removal
domains, plans the transitions and writes them through the store in chunks. The
run writes a plain-text transcript to a caller-supplied sink while it goes, so the
caller decides whether it ends up in an HTTP stream, a terminal or a test buffer.

Re-running after a failure is safe: the plan is recomputed from whatever the
previous run managed to apply.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from preloadsync.domain.errors import (
    BatchWriteError,
    PreloadSyncError,
    StoreError,
    StoreReadError,
)
from preloadsync.domain.model import PreloadStatus
from preloadsync.domain.store import ChunkStarted, ChunkWritten

from .plan import ReconciliationPlan, plan_reconciliation

if TYPE_CHECKING:
    from preloadsync.domain.model import DomainName, PreloadList
    from preloadsync.domain.ports.fetching import PreloadListFetcher
    from preloadsync.domain.store import DomainStateStore

ProgressSink = Callable[[str], None]

log = getLogger(__name__)


def _discard(_text: str) -> None:
    return None


@dataclass(slots=True, frozen=True)
class ReconcileSummary:
    """Counts reported by one reconciliation run."""

    entries: int
    upstream_active: int
    added: int
    removed: int
    self_rejected: int
    applied: int


@dataclass(slots=True)
class ReconciliationEngine:
    fetch_preload_list: PreloadListFetcher
    store: DomainStateStore

    def reconcile(self, *, report: ProgressSink = _discard) -> ReconcileSummary:
        """Run one reconciliation, streaming the transcript to ``report``.

        Failures are appended to the transcript as an ``Internal error`` line and
        re-raised.
        """

        try:
            return self._reconcile(report)
        except PreloadSyncError as exc:
            log.error("Reconciliation failed: %s", exc)
            report(f"Internal error: {exc}\n")
            raise

    def _reconcile(self, report: ProgressSink) -> ReconcileSummary:
        log.info("Starting reconciliation against the upstream preload list")
        preload_list: PreloadList = self.fetch_preload_list()
        upstream_active = preload_list.enforced_names()

        preloaded = self._read_status(PreloadStatus.PRELOADED)
        pending_removal = self._read_status(PreloadStatus.PENDING_REMOVAL)

        plan = plan_reconciliation(upstream_active, preloaded, pending_removal)
        report(_format_counts(len(preload_list.entries), len(upstream_active), plan))
        log.info(
            "Reconciliation plan: entries=%s, enforced=%s, added=%s, removed=%s, "
            "self_rejected=%s",
            len(preload_list.entries),
            len(upstream_active),
            len(plan.added),
            len(plan.removed),
            len(plan.self_rejected),
        )

        applied = self._apply(plan, report)

        return ReconcileSummary(
            entries=len(preload_list.entries),
            upstream_active=len(upstream_active),
            added=len(plan.added),
            removed=len(plan.removed),
            self_rejected=len(plan.self_rejected),
            applied=applied,
        )

    def _read_status(self, status: PreloadStatus) -> list[DomainName]:
        try:
            return self.store.list_by_status(status)
        except StoreError as exc:
            raise StoreReadError(
                f"could not retrieve domain names previously marked as {status}. ({exc})"
            ) from exc

    def _apply(self, plan: ReconciliationPlan, report: ProgressSink) -> int:
        applied = 0
        if plan.is_empty:
            report("No updates.\n")
            log.info("Reconciliation found nothing to update")
            report(f"Success. {applied} domain states updated.\n")
            return applied

        try:
            for progress in self.store.apply_batch(plan.updates()):
                match progress:
                    case ChunkStarted(size=size):
                        report(f"Updating {size} entries...")
                    case ChunkWritten(applied=applied):
                        report(" done.\n")
        except BatchWriteError:
            report(" failed.\n")
            raise

        report(f"Success. {applied} domain states updated.\n")
        log.info("Reconciliation applied %s domain state updates", applied)
        return applied


def _format_counts(entries: int, upstream_active: int, plan: ReconciliationPlan) -> str:
    return (
        f"The preload list has {entries} entries.\n"
        f"- # of preloaded HSTS entries: {upstream_active}\n"
        f"- # to be added in this update: {len(plan.added)}\n"
        f"- # to be removed this update: {len(plan.removed)}\n"
        f"- # to be self-rejected this update: {len(plan.self_rejected)}\n"
    )
