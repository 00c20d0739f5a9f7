"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from preloadsync.adapters.eligibility import HttpEligibilityChecker
from preloadsync.adapters.preload_list import HttpPreloadListFetcher
from preloadsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDomainStateUnitOfWork,
    is_started,
    startup,
)
from preloadsync.config import get_reconcile_config
from preloadsync.domain.model import PreloadEntry, PreloadStatus
from preloadsync.domain.reconciliation import ReconciliationEngine
from preloadsync.domain.store import DomainStateStore
from preloadsync.domain.submission import SubmissionService

if TYPE_CHECKING:
    from preloadsync.adapters.eligibility.client import CheckKind
    from preloadsync.domain.model import DomainName, DomainState, Issues
    from preloadsync.domain.ports.eligibility import EligibilityCheck
    from preloadsync.domain.ports.fetching import PreloadListFetcher
    from preloadsync.domain.reconciliation import ProgressSink, ReconcileSummary
    from preloadsync.domain.store import UnitOfWorkFactory


log = getLogger(__name__)


def _ignore(_text: str) -> None:
    return None


def build_store(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    chunk_size: int | None = None,
) -> DomainStateStore:
    """Return a store over the configured SQLAlchemy backend unless a factory is given."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyDomainStateUnitOfWork
    effective_chunk_size = chunk_size or get_reconcile_config().chunk_size
    return DomainStateStore(unit_of_work_factory, chunk_size=effective_chunk_size)


def reconcile_preload_list(
    *,
    report: ProgressSink = _ignore,
    fetcher: PreloadListFetcher | None = None,
    store: DomainStateStore | None = None,
) -> ReconcileSummary:
    """Bring recorded domain states in line with the upstream preload list."""

    engine = ReconciliationEngine(
        fetch_preload_list=fetcher or HttpPreloadListFetcher(),
        store=store or build_store(),
    )
    summary = engine.reconcile(report=report)
    log.info(
        "Finished reconciliation: added=%s, removed=%s, self_rejected=%s, applied=%s",
        summary.added,
        summary.removed,
        summary.self_rejected,
        summary.applied,
    )
    return summary


def submit_domain(
    name: DomainName,
    *,
    store: DomainStateStore | None = None,
    check_preloadable: EligibilityCheck | None = None,
) -> Issues:
    """Submit ``name`` for inclusion in the preload list."""

    service = SubmissionService(
        store=store or build_store(),
        check_preloadable=check_preloadable or HttpEligibilityChecker(kind="preloadable"),
    )
    return service.submit(name)


def check_domain(
    name: DomainName,
    *,
    kind: CheckKind = "preloadable",
    checker: EligibilityCheck | None = None,
) -> Issues:
    """Run one eligibility check without touching the store."""

    return (checker or HttpEligibilityChecker(kind=kind))(name)


def domain_status(name: DomainName, *, store: DomainStateStore | None = None) -> DomainState:
    return (store or build_store()).get(name)


def pending_entries(*, store: DomainStateStore | None = None) -> list[PreloadEntry]:
    """Pending submissions as the entries they would become in the preload list."""

    names = (store or build_store()).list_by_status(PreloadStatus.PENDING)
    return [PreloadEntry.pending(name) for name in names]


def all_states(*, store: DomainStateStore | None = None) -> list[DomainState]:
    return (store or build_store()).list_all()
