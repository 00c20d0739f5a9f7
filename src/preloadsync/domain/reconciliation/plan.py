"""Reconciliation plan: status transitions that align local states with upstream.

Three disjoint diffs make up the plan, in this order:

- ``added``: enforced upstream, neither recorded as preloaded nor pending removal
- ``removed``: recorded as preloaded, no longer enforced upstream
- ``self_rejected``: pending removal and absent upstream

A name read back under both local statuses is only counted as removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from preloadsync.domain.model import DomainState, PreloadStatus
from preloadsync.domain.sets import difference

if TYPE_CHECKING:
    from collections.abc import Sequence

    from preloadsync.domain.model import DomainName

SELF_REJECTED_MESSAGE: Final[str] = "Domain was added and removed without being preloaded."


@dataclass(slots=True, frozen=True)
class ReconciliationPlan:
    added: tuple[DomainName, ...] = ()
    removed: tuple[DomainName, ...] = ()
    self_rejected: tuple[DomainName, ...] = ()

    def __len__(self) -> int:
        return len(self.added) + len(self.removed) + len(self.self_rejected)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def updates(self) -> list[DomainState]:
        """Materialize the plan as state writes."""

        updates = [DomainState(name=name, status=PreloadStatus.PRELOADED) for name in self.added]
        updates.extend(
            DomainState(name=name, status=PreloadStatus.REMOVED) for name in self.removed
        )
        updates.extend(
            DomainState(name=name, status=PreloadStatus.REJECTED, message=SELF_REJECTED_MESSAGE)
            for name in self.self_rejected
        )
        return updates


def plan_reconciliation(
    upstream_active: Sequence[DomainName],
    preloaded: Sequence[DomainName],
    pending_removal: Sequence[DomainName] = (),
) -> ReconciliationPlan:
    """Compute the transitions that bring the local record in line with upstream."""

    return ReconciliationPlan(
        added=tuple(difference(difference(upstream_active, preloaded), pending_removal)),
        removed=tuple(difference(preloaded, upstream_active)),
        self_rejected=tuple(difference(difference(pending_removal, upstream_active), preloaded)),
    )
