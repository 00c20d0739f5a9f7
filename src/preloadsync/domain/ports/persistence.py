"""Ports for persisting domain states."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from preloadsync.domain.model import DomainName, DomainState, PreloadStatus


@runtime_checkable
class DomainStateRepository(Protocol):
    """Persistence contract for domain states keyed by name.

    Writes are upserts and only become durable when the owning unit of work commits.
    """

    def get(self, name: DomainName) -> DomainState | None: ...

    def names_with_status(self, status: PreloadStatus) -> list[DomainName]: ...

    def all(self) -> list[DomainState]: ...

    def upsert_many(self, states: Sequence[DomainState]) -> None: ...

    def put_unless_status(
        self,
        state: DomainState,
        *,
        blocked: Collection[PreloadStatus],
    ) -> bool:
        """Upsert ``state`` unless the stored status is in ``blocked``; report success."""
        ...
